"""Asset API tests."""


def create_asset(client, headers, **overrides):
    payload = {"name": "Sunset", "description": "Oil on canvas", "tags": []}
    payload.update(overrides)
    response = client.post("/api/v1/assets", headers=headers, json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_asset_filters_blank_tags_and_slugs_name(client, auth_headers):
    """Test that blank tags are dropped and the slug is derived from the name."""
    response = client.post(
        "/api/v1/assets",
        headers=auth_headers,
        json={"name": "My Art", "description": "A drawing", "tags": ["x", "", "y"]},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["tags"] == ["x", "y"]
    assert data["slug"] == "my-art"
    assert data["owner_id"] == auth_headers.user_id
    assert data["image"] == "no-photo.jpg"
    assert data["likes"] == []
    assert data["comments"] == []
    assert data["is_public"] is False


def test_create_asset_requires_name_and_description(client, auth_headers):
    """Test that missing fields are reported together."""
    response = client.post("/api/v1/assets", headers=auth_headers, json={"tags": ["x"]})
    assert response.status_code == 400
    assert response.json()["errors"] == ["Please add a name", "Please add a description"]


def test_create_asset_name_too_long(client, auth_headers):
    """Test the asset name length limit."""
    response = client.post(
        "/api/v1/assets",
        headers=auth_headers,
        json={"name": "n" * 51, "description": "Too long"},
    )
    assert response.status_code == 400
    assert "Name can not be more than 50 characters" in response.json()["errors"]


def test_get_assets(client, auth_headers, asset):
    """Test getting all assets."""
    response = client.get("/api/v1/assets", headers=auth_headers)
    assert response.status_code == 200
    assert [a["id"] for a in response.json()] == [asset["id"]]


def test_get_asset(client, auth_headers, asset):
    """Test getting a single asset."""
    response = client.get(f"/api/v1/assets/{asset['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["success"] is True
    assert response.json()["asset"]["name"] == "My Art"


def test_get_missing_asset(client, auth_headers):
    """Test that a missing asset is a 404, not an empty success."""
    response = client.get("/api/v1/assets/999999", headers=auth_headers)
    assert response.status_code == 404
    assert response.json()["success"] is False


def test_update_asset(client, auth_headers, asset):
    """Test partial update recomputes the slug."""
    response = client.put(
        f"/api/v1/assets/{asset['id']}",
        headers=auth_headers,
        json={"name": "Night Sky!", "tags": [" stars ", "  "]},
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["name"] == "Night Sky!"
    assert data["slug"] == "night-sky"
    assert data["tags"] == ["stars"]
    assert data["description"] == "A drawing"


def test_update_asset_rejects_blank_name(client, auth_headers, asset):
    """Test that an update re-validates the asset."""
    response = client.put(
        f"/api/v1/assets/{asset['id']}", headers=auth_headers, json={"name": "   "}
    )
    assert response.status_code == 400


def test_update_asset_by_other_user(client, other_auth_headers, asset):
    """Test that only the owner can update an asset."""
    response = client.put(
        f"/api/v1/assets/{asset['id']}", headers=other_auth_headers, json={"name": "Mine now"}
    )
    assert response.status_code == 401


def test_delete_asset(client, auth_headers, asset):
    """Test deleting an asset returns what was deleted."""
    response = client.delete(f"/api/v1/assets/{asset['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["asset"]["id"] == asset["id"]

    response = client.get(f"/api/v1/assets/{asset['id']}", headers=auth_headers)
    assert response.status_code == 404


def test_delete_asset_by_other_user(client, auth_headers, other_auth_headers, asset):
    """Test that only the owner can delete an asset."""
    response = client.delete(f"/api/v1/assets/{asset['id']}", headers=other_auth_headers)
    assert response.status_code == 401

    response = client.get(f"/api/v1/assets/{asset['id']}", headers=auth_headers)
    assert response.status_code == 200


def test_like_twice_then_unlike_twice(client, auth_headers, asset):
    """Test like conflicts and unlike of an asset not liked."""
    url = f"/api/v1/assets/{asset['id']}/likes"

    response = client.post(url, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["data"]["likes"] == [auth_headers.user_id]

    response = client.post(url, headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["error"] == "Asset already liked"

    response = client.delete(url, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["data"]["likes"] == []

    response = client.delete(url, headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["error"] == "Asset has not yet been liked"


def test_likes_from_two_users(client, auth_headers, other_auth_headers, asset):
    """Test that likes from different users accumulate."""
    url = f"/api/v1/assets/{asset['id']}/likes"
    client.post(url, headers=auth_headers)
    response = client.post(url, headers=other_auth_headers)

    assert sorted(response.json()["data"]["likes"]) == sorted(
        [auth_headers.user_id, other_auth_headers.user_id]
    )


def test_like_missing_asset(client, auth_headers):
    """Test liking an asset that does not exist."""
    response = client.post("/api/v1/assets/999999/likes", headers=auth_headers)
    assert response.status_code == 404


def test_comments_newest_first(client, auth_headers, asset):
    """Test that new comments are placed before older ones."""
    url = f"/api/v1/assets/{asset['id']}/comments"
    client.post(url, headers=auth_headers, json={"text": "First comment"})
    response = client.post(url, headers=auth_headers, json={"text": "Second comment"})

    assert response.status_code == 200
    comments = response.json()["data"]["comments"]
    assert [c["text"] for c in comments] == ["Second comment", "First comment"]
    assert comments[0]["author_id"] == auth_headers.user_id
    assert comments[0]["asset_id"] == asset["id"]


def test_comment_length_limits(client, auth_headers, asset):
    """Test the comment text bounds."""
    url = f"/api/v1/assets/{asset['id']}/comments"

    response = client.post(url, headers=auth_headers, json={"text": "hey"})
    assert response.status_code == 400
    assert response.json()["error"] == "Your comment should have at least 5 characters."

    response = client.post(url, headers=auth_headers, json={"text": "x" * 201})
    assert response.status_code == 400
    assert response.json()["error"] == "Your comment should not exceed 200 characters."

    response = client.post(url, headers=auth_headers, json={})
    assert response.status_code == 400
    assert response.json()["error"] == "Please provide a comment."


def test_remove_comment_only_by_author(client, auth_headers, other_auth_headers, asset):
    """Test that a comment can only be removed by its author."""
    url = f"/api/v1/assets/{asset['id']}/comments"
    response = client.post(url, headers=other_auth_headers, json={"text": "Lovely colours"})
    comment_id = response.json()["data"]["comments"][0]["id"]

    # Even the asset owner cannot remove someone else's comment
    response = client.delete(f"{url}/{comment_id}", headers=auth_headers)
    assert response.status_code == 401
    assert response.json()["error"] == "User not authorized"

    response = client.delete(f"{url}/{comment_id}", headers=other_auth_headers)
    assert response.status_code == 200
    assert response.json()["data"]["comments"] == []


def test_remove_missing_comment(client, auth_headers, asset):
    """Test removing a comment that does not exist."""
    response = client.delete(
        f"/api/v1/assets/{asset['id']}/comments/999999", headers=auth_headers
    )
    assert response.status_code == 404
    assert response.json()["error"] == "Comment does not exist"


def test_tags(client, auth_headers, other_auth_headers):
    """Test the tag listing and tag filter endpoints."""
    first = create_asset(client, auth_headers, name="One", tags=["red", "blue"])
    second = create_asset(client, other_auth_headers, name="Two", tags=["blue", "green"])

    response = client.get("/api/v1/assets/tags", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == ["blue", "green", "red"]

    response = client.get("/api/v1/assets/tags/blue", headers=auth_headers)
    assert [a["id"] for a in response.json()] == [first["id"], second["id"]]

    response = client.get("/api/v1/assets/tags/red", headers=auth_headers)
    assert [a["id"] for a in response.json()] == [first["id"]]

    response = client.get("/api/v1/assets/tags/purple", headers=auth_headers)
    assert response.json() == []


def test_assets_by_owner(client, auth_headers, other_auth_headers):
    """Test listing the assets of one user."""
    mine = create_asset(client, auth_headers, name="Mine")
    create_asset(client, other_auth_headers, name="Theirs")

    response = client.get(f"/api/v1/assets/user/{auth_headers.user_id}", headers=auth_headers)
    assert response.status_code == 200
    assert [a["id"] for a in response.json()] == [mine["id"]]
