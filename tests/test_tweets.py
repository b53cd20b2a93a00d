"""Tests for tweet endpoints: timeline, CRUD with ownership rules, toggles, replies, uploads."""

import unittest
from datetime import UTC, datetime, timedelta
from pathlib import Path

from app.core.config import get_settings
from app.core.database import SessionLocal
from app.models import Like, Reply, Retweet, Tweet, User
from app.schemas.roles import Role
from tests.support import ApiTestCase


class TestExampleScenario(ApiTestCase):
    """Register, post, like, unlike."""

    def test_register_post_like_unlike(self) -> None:
        reg = self.client.post("/api/auth/register", json={"username": "alice", "password": "secret1"})
        self.assertEqual(reg.status_code, 201)
        alice_headers = {"Authorization": f"Bearer {reg.json()['token']}"}

        created = self.client.post("/api/tweets", json={"content": "hi"}, headers=alice_headers)
        self.assertEqual(created.status_code, 201)
        tweet = created.json()
        self.assertEqual(tweet["author"]["username"], "alice")
        self.assertEqual(tweet["likesCount"], 0)
        self.assertFalse(tweet["userLiked"])

        bob = self.make_user("bob")
        first = self.client.post(f"/api/tweets/{tweet['id']}/like", headers=bob["headers"])
        self.assertEqual(first.json(), {"liked": True, "likesCount": 1})
        second = self.client.post(f"/api/tweets/{tweet['id']}/like", headers=bob["headers"])
        self.assertEqual(second.json(), {"liked": False, "likesCount": 0})


class TestTimeline(ApiTestCase):
    def test_sorted_newest_first(self) -> None:
        alice = self.make_user("alice")
        db = SessionLocal()
        try:
            now = datetime.now(UTC)
            db.add(Tweet(user_id=alice["id"], username="alice", content="old", images=[], timestamp=now - timedelta(days=2)))
            db.add(Tweet(user_id=alice["id"], username="alice", content="new", images=[], timestamp=now))
            db.add(Tweet(user_id=alice["id"], username="alice", content="mid", images=[], timestamp=now - timedelta(days=1)))
            db.commit()
        finally:
            db.close()

        response = self.client.get("/api/tweets")
        self.assertEqual(response.status_code, 200)
        self.assertEqual([t["content"] for t in response.json()], ["new", "mid", "old"])

    def test_viewer_flags_follow_token(self) -> None:
        alice = self.make_user("alice")
        bob = self.make_user("bob")
        tweet = self.post_tweet(alice)
        self.client.post(f"/api/tweets/{tweet['id']}/like", headers=bob["headers"])
        self.client.post(f"/api/tweets/{tweet['id']}/retweet", headers=bob["headers"])

        as_bob = self.client.get("/api/tweets", headers=bob["headers"]).json()[0]
        self.assertTrue(as_bob["userLiked"])
        self.assertTrue(as_bob["userRetweeted"])
        self.assertEqual(as_bob["likesCount"], 1)
        self.assertEqual(as_bob["retweetsCount"], 1)

        anonymous = self.client.get("/api/tweets").json()[0]
        self.assertFalse(anonymous["userLiked"])
        self.assertFalse(anonymous["userRetweeted"])
        self.assertEqual(anonymous["likesCount"], 1)

    def test_invalid_token_on_public_read_is_anonymous(self) -> None:
        alice = self.make_user("alice")
        self.post_tweet(alice)
        response = self.client.get("/api/tweets", headers={"Authorization": "Bearer garbage"})
        self.assertEqual(response.status_code, 200)
        self.assertFalse(response.json()[0]["userLiked"])

    def test_counts_ignore_stored_placeholders(self) -> None:
        alice = self.make_user("alice")
        db = SessionLocal()
        try:
            tweet = Tweet(user_id=alice["id"], username="alice", content="x", images=[], likes_count=99)
            db.add(tweet)
            db.commit()
            tweet_id = tweet.id
        finally:
            db.close()
        body = self.client.get(f"/api/tweets/{tweet_id}").json()
        self.assertEqual(body["likesCount"], 0)


class TestGetTweet(ApiTestCase):
    def test_missing_tweet_is_404(self) -> None:
        response = self.client.get("/api/tweets/999")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["message"], "Tweet not found")

    def test_non_numeric_id_is_400(self) -> None:
        response = self.client.get("/api/tweets/abc")
        self.assertEqual(response.status_code, 400)

    def test_detail_includes_replies(self) -> None:
        alice = self.make_user("alice")
        bob = self.make_user("bob")
        tweet = self.post_tweet(alice)
        reply = self.client.post(
            f"/api/tweets/{tweet['id']}/reply", json={"content": "  nice one  "}, headers=bob["headers"]
        )
        self.assertEqual(reply.status_code, 201)
        self.assertEqual(reply.json()["content"], "nice one")
        self.assertEqual(reply.json()["author"]["username"], "bob")
        self.assertEqual(reply.json()["tweetId"], tweet["id"])

        detail = self.client.get(f"/api/tweets/{tweet['id']}").json()
        self.assertEqual(detail["repliesCount"], 1)
        self.assertEqual([r["content"] for r in detail["replies"]], ["nice one"])


class TestCreateTweet(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.alice = self.make_user("alice")

    def test_requires_authentication(self) -> None:
        response = self.client.post("/api/tweets", json={"content": "hi"})
        self.assertEqual(response.status_code, 401)

    def test_blank_content_rejected(self) -> None:
        response = self.client.post("/api/tweets", json={"content": "   "}, headers=self.alice["headers"])
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Tweet content is required")

    def test_content_over_280_rejected(self) -> None:
        response = self.client.post("/api/tweets", json={"content": "a" * 281}, headers=self.alice["headers"])
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Tweet content must be 280 characters or less")

    def test_280_code_points_accepted(self) -> None:
        content = "é" * 280
        response = self.client.post("/api/tweets", json={"content": content}, headers=self.alice["headers"])
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["content"], content)

    def test_content_trimmed_and_counter_bumped(self) -> None:
        tweet = self.post_tweet(self.alice, "  spaced  ")
        self.assertEqual(tweet["content"], "spaced")
        self.assertEqual(tweet["userId"], self.alice["id"])
        db = SessionLocal()
        try:
            self.assertEqual(db.get(User, self.alice["id"]).tweets_count, 1)
        finally:
            db.close()

    def test_multipart_with_images(self) -> None:
        files = [
            ("images", ("a.png", b"\x89PNG fake", "image/png")),
            ("images", ("b.jpg", b"\xff\xd8 fake", "image/jpeg")),
        ]
        response = self.client.post(
            "/api/tweets", data={"content": "pics"}, files=files, headers=self.alice["headers"]
        )
        self.assertEqual(response.status_code, 201, response.text)
        images = response.json()["images"]
        self.assertEqual(len(images), 2)
        settings = get_settings()
        for url in images:
            self.assertTrue(url.startswith(f"{settings.UPLOAD_URL_PREFIX}/"))
            name = url.rsplit("/", 1)[1]
            self.assertTrue((Path(settings.UPLOAD_DIR) / name).exists())
        self.assertTrue(images[0].endswith(".png"))

        served = self.client.get(images[0])
        self.assertEqual(served.status_code, 200)
        self.assertEqual(served.content, b"\x89PNG fake")

    def test_more_than_four_images_rejected(self) -> None:
        files = [("images", (f"{i}.png", b"x", "image/png")) for i in range(5)]
        response = self.client.post(
            "/api/tweets", data={"content": "too many"}, files=files, headers=self.alice["headers"]
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "At most 4 images are allowed")

    def test_non_image_rejected(self) -> None:
        files = [("images", ("notes.txt", b"hello", "text/plain"))]
        response = self.client.post(
            "/api/tweets", data={"content": "doc"}, files=files, headers=self.alice["headers"]
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Only image files are allowed")

    def test_invalid_json_rejected(self) -> None:
        response = self.client.post(
            "/api/tweets",
            content=b"{not json",
            headers={**self.alice["headers"], "Content-Type": "application/json"},
        )
        self.assertEqual(response.status_code, 400)


class TestUpdateTweetOwnership(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.alice = self.make_user("alice")
        self.bob = self.make_user("bob")
        self.tweet = self.post_tweet(self.alice, "original")

    def test_base_user_cannot_edit_others_tweet(self) -> None:
        response = self.client.put(
            f"/api/tweets/{self.tweet['id']}", json={"content": "hijack"}, headers=self.bob["headers"]
        )
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["message"], "Insufficient permissions")

    def test_author_can_edit_own_tweet(self) -> None:
        response = self.client.put(
            f"/api/tweets/{self.tweet['id']}", json={"content": "edited"}, headers=self.alice["headers"]
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["content"], "edited")
        self.assertIsNotNone(body["updatedAt"])

    def test_editor_can_edit_any_tweet(self) -> None:
        editor = self.make_user("sarah", Role.EDITOR)
        response = self.client.put(
            f"/api/tweets/{self.tweet['id']}", json={"content": "moderated"}, headers=editor["headers"]
        )
        self.assertEqual(response.status_code, 200)

    def test_missing_tweet_falls_through_to_404(self) -> None:
        response = self.client.put("/api/tweets/999", json={"content": "x"}, headers=self.bob["headers"])
        self.assertEqual(response.status_code, 404)

    def test_edit_validates_content(self) -> None:
        response = self.client.put(
            f"/api/tweets/{self.tweet['id']}", json={"content": ""}, headers=self.alice["headers"]
        )
        self.assertEqual(response.status_code, 400)

    def test_base_user_cannot_delete_others_tweet(self) -> None:
        response = self.client.delete(f"/api/tweets/{self.tweet['id']}", headers=self.bob["headers"])
        self.assertEqual(response.status_code, 403)


class TestDeleteTweet(ApiTestCase):
    def test_delete_cascades_engagement(self) -> None:
        alice = self.make_user("alice")
        bob = self.make_user("bob")
        doomed = self.post_tweet(alice, "doomed")
        survivor = self.post_tweet(alice, "survivor")
        for tweet in (doomed, survivor):
            self.client.post(f"/api/tweets/{tweet['id']}/like", headers=bob["headers"])
            self.client.post(f"/api/tweets/{tweet['id']}/retweet", headers=bob["headers"])
            self.client.post(f"/api/tweets/{tweet['id']}/reply", json={"content": "r"}, headers=bob["headers"])

        response = self.client.delete(f"/api/tweets/{doomed['id']}", headers=alice["headers"])
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["message"], "Tweet deleted successfully")
        self.assertEqual(response.json()["tweet"]["id"], doomed["id"])

        self.assertEqual(self.client.get(f"/api/tweets/{doomed['id']}").status_code, 404)
        db = SessionLocal()
        try:
            for model in (Like, Retweet, Reply):
                self.assertEqual(db.query(model).filter(model.tweet_id == doomed["id"]).count(), 0)
            self.assertEqual(db.get(User, alice["id"]).tweets_count, 1)
        finally:
            db.close()

        other = self.client.get(f"/api/tweets/{survivor['id']}").json()
        self.assertEqual(other["likesCount"], 1)
        self.assertEqual(other["retweetsCount"], 1)
        self.assertEqual(other["repliesCount"], 1)

    def test_admin_can_delete_any_tweet(self) -> None:
        alice = self.make_user("alice")
        admin = self.make_user("root", Role.ADMIN)
        tweet = self.post_tweet(alice)
        response = self.client.delete(f"/api/tweets/{tweet['id']}", headers=admin["headers"])
        self.assertEqual(response.status_code, 200)

    def test_stored_counter_never_negative(self) -> None:
        alice = self.make_user("alice")
        tweet = self.post_tweet(alice)
        db = SessionLocal()
        try:
            db.get(User, alice["id"]).tweets_count = 0
            db.commit()
        finally:
            db.close()
        self.client.delete(f"/api/tweets/{tweet['id']}", headers=alice["headers"])
        db = SessionLocal()
        try:
            self.assertEqual(db.get(User, alice["id"]).tweets_count, 0)
        finally:
            db.close()

    def test_ids_are_not_reused_after_delete(self) -> None:
        alice = self.make_user("alice")
        first = self.post_tweet(alice, "one")
        second = self.post_tweet(alice, "two")
        self.client.delete(f"/api/tweets/{second['id']}", headers=alice["headers"])
        third = self.post_tweet(alice, "three")
        self.assertGreater(third["id"], second["id"])
        self.assertGreater(second["id"], first["id"])


class TestToggles(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.alice = self.make_user("alice")
        self.bob = self.make_user("bob")
        self.tweet = self.post_tweet(self.alice)

    def test_like_parity(self) -> None:
        url = f"/api/tweets/{self.tweet['id']}/like"
        for n in range(1, 6):
            body = self.client.post(url, headers=self.bob["headers"]).json()
            self.assertEqual(body["liked"], n % 2 == 1)
            self.assertEqual(body["likesCount"], n % 2)

    def test_retweet_toggle(self) -> None:
        url = f"/api/tweets/{self.tweet['id']}/retweet"
        self.assertEqual(self.client.post(url, headers=self.bob["headers"]).json(), {"retweeted": True, "retweetsCount": 1})
        self.assertEqual(self.client.post(url, headers=self.alice["headers"]).json(), {"retweeted": True, "retweetsCount": 2})
        self.assertEqual(self.client.post(url, headers=self.bob["headers"]).json(), {"retweeted": False, "retweetsCount": 1})

    def test_toggle_on_missing_tweet_is_404(self) -> None:
        response = self.client.post("/api/tweets/999/like", headers=self.bob["headers"])
        self.assertEqual(response.status_code, 404)

    def test_toggle_requires_authentication(self) -> None:
        response = self.client.post(f"/api/tweets/{self.tweet['id']}/like")
        self.assertEqual(response.status_code, 401)

    def test_reply_validation(self) -> None:
        url = f"/api/tweets/{self.tweet['id']}/reply"
        empty = self.client.post(url, json={"content": ""}, headers=self.bob["headers"])
        self.assertEqual(empty.status_code, 400)
        self.assertEqual(empty.json()["message"], "Reply content is required")
        long = self.client.post(url, json={"content": "x" * 281}, headers=self.bob["headers"])
        self.assertEqual(long.status_code, 400)
        missing = self.client.post("/api/tweets/999/reply", json={"content": "hi"}, headers=self.bob["headers"])
        self.assertEqual(missing.status_code, 404)


if __name__ == "__main__":
    unittest.main()
