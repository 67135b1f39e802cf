"""
MyGram Backend — Owned Resource API Tests
===========================================

What:  Photo, comment, social media and account endpoints with two users,
       checking that only the owner can change or delete a resource.

What we test:
    ✅ Create sets the owner from the session
    ✅ Non-owner update/delete → 403, owner → 200
    ✅ Missing id → 404 (even for a non-owner), bad id → 400
    ✅ Update bodies are validated only after the ownership checks pass
    ✅ Deleted resources disappear from reads
    ✅ Self-only account edit and delete
"""

import pytest

PHOTO = {"title": "Sunset", "caption": "Bali", "photo_url": "https://img.mygram.io/1.jpg"}


async def _login(client, username: str) -> dict:
    account = {
        "username": username,
        "email": f"{username}@mygram.io",
        "password": "s3cret!",
        "dob": "2000-01-01",
    }
    await client.post("/users/register", json=account)
    response = await client.post(
        "/users/login", json={"email": account["email"], "password": account["password"]}
    )
    return {"Authorization": f"Bearer {response.json()['token']}"}


class TestPhotos:

    @pytest.mark.asyncio
    async def test_create_sets_owner_from_session(self, test_client):
        alice = await _login(test_client, "alice")

        response = await test_client.post("/photos", json=PHOTO, headers=alice)

        assert response.status_code == 201
        assert response.json()["user_id"] == 1
        assert response.json()["title"] == "Sunset"

    @pytest.mark.asyncio
    async def test_create_requires_title_and_url(self, test_client):
        alice = await _login(test_client, "alice")
        response = await test_client.post("/photos", json={"caption": "x"}, headers=alice)
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_list_includes_owner_summary(self, test_client):
        alice = await _login(test_client, "alice")
        await test_client.post("/photos", json=PHOTO, headers=alice)

        response = await test_client.get("/photos", headers=alice)

        assert response.status_code == 200
        [photo] = response.json()
        assert photo["user"] == {"id": 1, "username": "alice", "email": "alice@mygram.io"}

    @pytest.mark.asyncio
    async def test_list_by_user(self, test_client):
        alice = await _login(test_client, "alice")
        bob = await _login(test_client, "bob")
        await test_client.post("/photos", json=PHOTO, headers=alice)
        await test_client.post("/photos", json={**PHOTO, "title": "Bob's"}, headers=bob)

        response = await test_client.get("/photos/user", params={"user_id": "2"}, headers=alice)

        assert response.status_code == 200
        assert [p["title"] for p in response.json()] == ["Bob's"]

    @pytest.mark.asyncio
    async def test_list_by_user_requires_valid_id(self, test_client):
        alice = await _login(test_client, "alice")
        response = await test_client.get("/photos/user", headers=alice)
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_other_user_cannot_update(self, test_client):
        alice = await _login(test_client, "alice")
        bob = await _login(test_client, "bob")
        await test_client.post("/photos", json=PHOTO, headers=alice)

        response = await test_client.put("/photos/1", json={**PHOTO, "title": "Mine now"}, headers=bob)

        assert response.status_code == 403
        assert response.json()["message"] == "You are not authorized to edit this photo"
        unchanged = await test_client.get("/photos/1", headers=alice)
        assert unchanged.json()["title"] == "Sunset"

    @pytest.mark.asyncio
    async def test_owner_can_update(self, test_client):
        alice = await _login(test_client, "alice")
        await test_client.post("/photos", json=PHOTO, headers=alice)

        response = await test_client.put("/photos/1", json={**PHOTO, "title": "Sunrise"}, headers=alice)

        assert response.status_code == 200
        assert response.json()["title"] == "Sunrise"
        assert response.json()["user_id"] == 1

    @pytest.mark.asyncio
    async def test_other_user_cannot_delete(self, test_client):
        alice = await _login(test_client, "alice")
        bob = await _login(test_client, "bob")
        await test_client.post("/photos", json=PHOTO, headers=alice)

        response = await test_client.delete("/photos/1", headers=bob)

        assert response.status_code == 403
        assert (await test_client.get("/photos/1", headers=alice)).status_code == 200

    @pytest.mark.asyncio
    async def test_owner_can_delete(self, test_client):
        alice = await _login(test_client, "alice")
        await test_client.post("/photos", json=PHOTO, headers=alice)

        response = await test_client.delete("/photos/1", headers=alice)

        assert response.status_code == 200
        assert response.json()["message"] == "Your photo has been successfully deleted"
        assert response.json()["photo"]["id"] == 1
        assert (await test_client.get("/photos/1", headers=alice)).status_code == 404

    @pytest.mark.asyncio
    async def test_missing_photo_is_not_found_for_non_owner(self, test_client):
        bob = await _login(test_client, "bob")
        response = await test_client.delete("/photos/999", headers=bob)
        assert response.status_code == 404

    @pytest.mark.parametrize("bad_id", ["abc", "0", "-1"])
    @pytest.mark.asyncio
    async def test_bad_id_is_bad_request(self, test_client, bad_id):
        alice = await _login(test_client, "alice")
        response = await test_client.put(f"/photos/{bad_id}", json=PHOTO, headers=alice)

        assert response.status_code == 400
        assert response.json()["message"] == "invalid required param"

    @pytest.mark.asyncio
    async def test_invalid_body_from_non_owner_is_forbidden(self, test_client):
        alice = await _login(test_client, "alice")
        bob = await _login(test_client, "bob")
        await test_client.post("/photos", json=PHOTO, headers=alice)

        response = await test_client.put("/photos/1", json={}, headers=bob)

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_invalid_body_on_missing_photo_is_not_found(self, test_client):
        bob = await _login(test_client, "bob")
        response = await test_client.put("/photos/999", json={}, headers=bob)
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_invalid_body_from_owner_is_bad_request(self, test_client):
        alice = await _login(test_client, "alice")
        await test_client.post("/photos", json=PHOTO, headers=alice)

        response = await test_client.put("/photos/1", json={}, headers=alice)

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"
        assert response.json()["message"] == "title: Field required"

    @pytest.mark.asyncio
    async def test_bad_id_wins_over_invalid_body(self, test_client):
        alice = await _login(test_client, "alice")
        response = await test_client.put("/photos/abc", json={}, headers=alice)

        assert response.status_code == 400
        assert response.json()["message"] == "invalid required param"


class TestComments:

    @pytest.mark.asyncio
    async def test_comment_on_missing_photo_is_not_found(self, test_client):
        alice = await _login(test_client, "alice")
        response = await test_client.post(
            "/comments", json={"message": "nice", "photo_id": 42}, headers=alice
        )
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_comment_belongs_to_author_not_photo_owner(self, test_client):
        alice = await _login(test_client, "alice")
        bob = await _login(test_client, "bob")
        await test_client.post("/photos", json=PHOTO, headers=alice)

        created = await test_client.post(
            "/comments", json={"message": "nice", "photo_id": 1}, headers=bob
        )
        assert created.status_code == 201
        assert created.json()["user_id"] == 2

        denied = await test_client.put("/comments/1", json={"message": "edited"}, headers=alice)
        assert denied.status_code == 403
        assert denied.json()["message"] == "You are not authorized to edit this comment"

        edited = await test_client.put("/comments/1", json={"message": "edited"}, headers=bob)
        assert edited.status_code == 200
        assert edited.json()["message"] == "edited"

    @pytest.mark.asyncio
    async def test_list_by_photo_with_details(self, test_client):
        alice = await _login(test_client, "alice")
        await test_client.post("/photos", json=PHOTO, headers=alice)
        await test_client.post("/comments", json={"message": "first", "photo_id": 1}, headers=alice)

        response = await test_client.get("/comments", params={"photo_id": "1"}, headers=alice)

        assert response.status_code == 200
        [comment] = response.json()
        assert comment["user"]["username"] == "alice"
        assert comment["photo"]["title"] == "Sunset"

    @pytest.mark.asyncio
    async def test_owner_can_delete_comment(self, test_client):
        alice = await _login(test_client, "alice")
        await test_client.post("/photos", json=PHOTO, headers=alice)
        await test_client.post("/comments", json={"message": "first", "photo_id": 1}, headers=alice)

        response = await test_client.delete("/comments/1", headers=alice)

        assert response.status_code == 200
        assert response.json()["comment"]["id"] == 1
        assert (await test_client.get("/comments/1", headers=alice)).status_code == 404

    @pytest.mark.asyncio
    async def test_invalid_body_checked_after_ownership(self, test_client):
        alice = await _login(test_client, "alice")
        bob = await _login(test_client, "bob")
        await test_client.post("/photos", json=PHOTO, headers=alice)
        await test_client.post("/comments", json={"message": "first", "photo_id": 1}, headers=alice)

        missing = await test_client.put("/comments/999", json={}, headers=alice)
        not_owner = await test_client.put("/comments/1", json={}, headers=bob)
        owner = await test_client.put("/comments/1", json={"message": ""}, headers=alice)

        assert missing.status_code == 404
        assert not_owner.status_code == 403
        assert owner.status_code == 400


class TestSocialMedias:

    @pytest.mark.asyncio
    async def test_list_defaults_to_caller(self, test_client):
        alice = await _login(test_client, "alice")
        bob = await _login(test_client, "bob")
        link = {"name": "Instagram", "social_media_url": "https://instagram.com/alice"}
        await test_client.post("/socialmedias", json=link, headers=alice)

        mine = await test_client.get("/socialmedias", headers=alice)
        theirs = await test_client.get("/socialmedias", headers=bob)
        by_id = await test_client.get("/socialmedias", params={"user_id": "1"}, headers=bob)

        assert [s["name"] for s in mine.json()] == ["Instagram"]
        assert theirs.json() == []
        assert [s["user_id"] for s in by_id.json()] == [1]

    @pytest.mark.asyncio
    async def test_only_owner_can_delete(self, test_client):
        alice = await _login(test_client, "alice")
        bob = await _login(test_client, "bob")
        link = {"name": "Instagram", "social_media_url": "https://instagram.com/alice"}
        await test_client.post("/socialmedias", json=link, headers=alice)

        assert (await test_client.delete("/socialmedias/1", headers=bob)).status_code == 403
        assert (await test_client.delete("/socialmedias/1", headers=alice)).status_code == 200

    @pytest.mark.asyncio
    async def test_invalid_body_checked_after_ownership(self, test_client):
        alice = await _login(test_client, "alice")
        bob = await _login(test_client, "bob")
        link = {"name": "Instagram", "social_media_url": "https://instagram.com/alice"}
        await test_client.post("/socialmedias", json=link, headers=alice)

        missing = await test_client.put("/socialmedias/999", json={}, headers=bob)
        not_owner = await test_client.put("/socialmedias/1", json={}, headers=bob)
        owner = await test_client.put("/socialmedias/1", json={"name": "X"}, headers=alice)
        edited = await test_client.put(
            "/socialmedias/1",
            json={"name": "X", "social_media_url": "https://x.com/alice"},
            headers=alice,
        )

        assert missing.status_code == 404
        assert not_owner.status_code == 403
        assert owner.status_code == 400
        assert owner.json()["message"] == "social_media_url: Field required"
        assert edited.status_code == 200
        assert edited.json()["name"] == "X"


class TestAccounts:

    @pytest.mark.asyncio
    async def test_user_cannot_edit_someone_else(self, test_client):
        await _login(test_client, "alice")
        bob = await _login(test_client, "bob")

        response = await test_client.put("/users/1", json={"username": "hacked"}, headers=bob)

        assert response.status_code == 403
        assert response.json()["message"] == "You are not authorized to edit this user"

    @pytest.mark.asyncio
    async def test_user_can_edit_self(self, test_client):
        alice = await _login(test_client, "alice")

        response = await test_client.put("/users/1", json={"username": "alice2"}, headers=alice)

        assert response.status_code == 200
        assert response.json()["username"] == "alice2"

    @pytest.mark.asyncio
    async def test_edit_applies_sign_up_rules(self, test_client):
        alice = await _login(test_client, "alice")
        response = await test_client.put("/users/1", json={"password": "abc"}, headers=alice)
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_edit_to_taken_email_is_conflict(self, test_client):
        alice = await _login(test_client, "alice")
        await _login(test_client, "bob")

        response = await test_client.put("/users/1", json={"email": "bob@mygram.io"}, headers=alice)

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_password_change_takes_effect(self, test_client):
        alice = await _login(test_client, "alice")
        await test_client.put("/users/1", json={"password": "n3w-pass"}, headers=alice)

        old = await test_client.post("/users/login", json={"email": "alice@mygram.io", "password": "s3cret!"})
        new = await test_client.post("/users/login", json={"email": "alice@mygram.io", "password": "n3w-pass"})

        assert old.status_code == 401
        assert new.status_code == 200

    @pytest.mark.asyncio
    async def test_delete_self_then_email_is_free_again(self, test_client):
        alice = await _login(test_client, "alice")

        response = await test_client.delete("/users/1", headers=alice)
        assert response.status_code == 200
        assert response.json()["message"] == "Your account has been successfully deleted"

        again = await test_client.post(
            "/users/register",
            json={"username": "alice", "email": "alice@mygram.io", "password": "s3cret!", "dob": "2000-01-01"},
        )
        assert again.status_code == 201
        assert again.json()["user"]["id"] == 2

    @pytest.mark.asyncio
    async def test_invalid_body_checked_after_ownership(self, test_client):
        await _login(test_client, "alice")
        bob = await _login(test_client, "bob")

        not_owner = await test_client.put("/users/1", json={"username": ""}, headers=bob)
        missing = await test_client.put("/users/999", json={"username": ""}, headers=bob)
        own = await test_client.put("/users/2", json={"username": ""}, headers=bob)

        assert not_owner.status_code == 403
        assert missing.status_code == 404
        assert own.status_code == 400

    @pytest.mark.asyncio
    async def test_password_over_bcrypt_limit_is_bad_request(self, test_client):
        alice = await _login(test_client, "alice")

        response = await test_client.put("/users/1", json={"password": "x" * 80}, headers=alice)

        assert response.status_code == 400
        assert response.json()["message"] == "password must be at most 72 bytes"
