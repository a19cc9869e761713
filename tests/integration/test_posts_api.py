def _create_post(client, header, text="Hello DevConnect!"):
    r = client.post("/api/posts", headers=header, json={"text": text})
    assert r.status_code == 200, r.text
    return r.json()


def test_create_post_short_text(client, auth_header):
    r = client.post("/api/posts", headers=auth_header, json={"text": "tiny"})
    assert r.status_code == 400
    assert r.json() == {"text": "Length must be between 8 to 300 characters"}


def test_create_post_requires_token(client):
    assert client.post("/api/posts", json={"text": "Hello DevConnect!"}).status_code == 401


def test_create_and_list_posts(client, auth_header):
    first = _create_post(client, auth_header, "first post here")
    second = _create_post(client, auth_header, "second post here")
    assert first["name"] == "Jane Doe"
    assert first["avatar"].startswith("https://www.gravatar.com/")

    listed = client.get("/api/posts").json()
    assert [p["id"] for p in listed] == [second["id"], first["id"]]

    r = client.get(f"/api/posts/{first['id']}")
    assert r.json()["text"] == "first post here"


def test_get_missing_post(client):
    r = client.get("/api/posts/5f0000000000000000000000")
    assert r.status_code == 404
    assert r.json() == {"nopostfound": "No post found with that ID"}


def test_like_twice_returns_400(client, auth_header):
    post = _create_post(client, auth_header)
    r = client.post(f"/api/posts/like/{post['id']}", headers=auth_header)
    assert r.status_code == 200
    assert len(r.json()["likes"]) == 1

    r = client.post(f"/api/posts/like/{post['id']}", headers=auth_header)
    assert r.status_code == 400
    assert r.json() == {"alreadyliked": "User already liked this post"}


def test_unlike(client, auth_header):
    post = _create_post(client, auth_header)
    r = client.post(f"/api/posts/unlike/{post['id']}", headers=auth_header)
    assert r.status_code == 400
    assert r.json() == {"notliked": "You have not yet liked this post"}

    client.post(f"/api/posts/like/{post['id']}", headers=auth_header)
    r = client.post(f"/api/posts/unlike/{post['id']}", headers=auth_header)
    assert r.status_code == 200
    assert r.json()["likes"] == []


def test_delete_post_ownership(client, register_user):
    jane = register_user()
    bob = register_user(name="Bob Smith", email="bob@devconnect.io")
    post = _create_post(client, jane)

    r = client.delete(f"/api/posts/{post['id']}", headers=bob)
    assert r.status_code == 401
    assert r.json() == {"notauthorized": "User not authorized"}

    r = client.delete(f"/api/posts/{post['id']}", headers=jane)
    assert r.json() == {"success": True}
    assert client.get(f"/api/posts/{post['id']}").status_code == 404


def test_comments(client, register_user):
    jane = register_user()
    bob = register_user(name="Bob Smith", email="bob@devconnect.io")
    post = _create_post(client, jane)

    r = client.post(f"/api/posts/comment/{post['id']}", headers=bob, json={"text": "x"})
    assert r.status_code == 400

    r = client.post(f"/api/posts/comment/{post['id']}", headers=bob, json={"text": "Great post, Jane"})
    assert r.status_code == 200
    comment = r.json()["comments"][0]
    assert comment["name"] == "Bob Smith"

    r = client.delete(f"/api/posts/comment/{post['id']}/5f0000000000000000000000", headers=bob)
    assert r.status_code == 404
    assert r.json() == {"commentnotexists": "Comment does not exist"}

    r = client.delete(f"/api/posts/comment/{post['id']}/{comment['id']}", headers=bob)
    assert r.status_code == 200
    assert r.json()["comments"] == []


def test_padded_text_checked_after_stripping(client, auth_header):
    r = client.post("/api/posts", headers=auth_header, json={"text": "ab" + " " * 12})
    assert r.status_code == 400
    assert r.json() == {"text": "Length must be between 8 to 300 characters"}

    post = _create_post(client, auth_header, "  padded post text  ")
    assert post["text"] == "padded post text"
