"""Comment gate over HTTP: submission, moderation, authorization."""


def _comment(client, blog, **overrides):
    body = {"author": "Aine", "email": "aine@example.com", "content": "Very helpful, thanks!"}
    body.update(overrides)
    return client.post(f"/api/content/comments/blogs/{blog.id}", json=body)


def test_new_comment_waits_for_approval(client, blog):
    r = _comment(client, blog)
    assert r.status_code == 201
    comment = r.json()["comment"]
    assert comment["approved"] is False
    assert comment["author"] == "Aine"

    public = client.get(f"/api/content/comments/blogs/{blog.id}").json()["comments"]
    assert public == []


def test_admin_sees_pending_comments(client, blog, admin_headers, reader_headers):
    _comment(client, blog)
    url = f"/api/content/comments/blogs/{blog.id}?include_pending=true"
    assert len(client.get(url, headers=admin_headers).json()["comments"]) == 1
    # Readers asking for pending comments get the public list
    assert client.get(url, headers=reader_headers).json()["comments"] == []


def test_empty_content_is_rejected_and_list_unchanged(client, blog, admin_headers):
    _comment(client, blog)
    r = _comment(client, blog, content="   ")
    assert r.status_code == 400
    assert r.json()["detail"] == "Author, email, and content are required"
    url = f"/api/content/comments/blogs/{blog.id}?include_pending=true"
    assert len(client.get(url, headers=admin_headers).json()["comments"]) == 1


def test_missing_fields_are_rejected(client, blog):
    r = client.post(f"/api/content/comments/blogs/{blog.id}", json={"content": "no author"})
    assert r.status_code == 400


def test_comment_on_unknown_content_is_404(client, blog):
    r = client.post(
        f"/api/content/comments/blogs/{blog.id + 1}",
        json={"author": "A", "email": "a@example.com", "content": "hi"},
    )
    assert r.status_code == 404


def test_approve_makes_comment_public(client, blog, admin_headers):
    comment_id = _comment(client, blog).json()["comment"]["id"]
    r = client.patch(f"/api/content/comments/blogs/{blog.id}/{comment_id}/approve", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["comment"]["approved"] is True
    public = client.get(f"/api/content/comments/blogs/{blog.id}").json()["comments"]
    assert [c["id"] for c in public] == [comment_id]


def test_moderation_requires_admin(client, blog, reader_headers):
    comment_id = _comment(client, blog).json()["comment"]["id"]
    approve_url = f"/api/content/comments/blogs/{blog.id}/{comment_id}/approve"
    delete_url = f"/api/content/comments/blogs/{blog.id}/{comment_id}"
    assert client.patch(approve_url).status_code == 401
    assert client.patch(approve_url, headers=reader_headers).status_code == 403
    assert client.delete(delete_url).status_code == 401
    assert client.delete(delete_url, headers=reader_headers).status_code == 403


def test_invalid_token_is_401(client, blog):
    comment_id = _comment(client, blog).json()["comment"]["id"]
    r = client.delete(
        f"/api/content/comments/blogs/{blog.id}/{comment_id}",
        headers={"Authorization": "Bearer not-a-jwt"},
    )
    assert r.status_code == 401


def test_delete_comment(client, blog, admin_headers):
    comment_id = _comment(client, blog).json()["comment"]["id"]
    url = f"/api/content/comments/blogs/{blog.id}/{comment_id}"
    assert client.delete(url, headers=admin_headers).json() == {"ok": True, "id": comment_id}
    assert client.delete(url, headers=admin_headers).status_code == 404
    assert client.patch(f"{url}/approve", headers=admin_headers).status_code == 404
