# On terminal 1 run the app (python -m fritter.main)
# On terminal 2 run (locust -f fritter/locustfile.py --host http://localhost:8000/api)

from locust import HttpUser, task, between
import random
import uuid

# Usernames signed up so far, shared by every simulated user
known_usernames = []

class FritterUser(HttpUser):
    wait_time = between(1, 3)

    def on_start(self):
        """Sign up and log in; the session cookie stays on self.client."""
        self.username = f"testuser-{uuid.uuid4().hex[:10]}"
        self.password = "password123"

        signup_data = {
            "username": self.username,
            "password": self.password,
        }
        self.client.post("/users", json=signup_data)

        login_data = {
            "username": self.username,
            "password": self.password,
        }
        response = self.client.post("/login", json=login_data)
        if response.status_code != 200:
            print(f"Login failed: {response.text}")
        known_usernames.append(self.username)

    @task
    def get_session_user(self):
        self.client.get("/session")

    @task(3)
    def send_friend_request(self):
        others = [name for name in known_usernames if name != self.username]
        if not others:
            return
        to = random.choice(others)
        # 403 is expected when already friends or already requested
        with self.client.post(f"/friend/requests/{to}", name="/friend/requests/[to]", catch_response=True) as response:
            if response.status_code in (200, 403):
                response.success()

    @task(3)
    def accept_friend_requests(self):
        response = self.client.get("/friend/requests")
        if response.status_code != 200:
            return
        for request in response.json():
            if request["to"] == self.username and request["status"] == "pending":
                with self.client.put(f"/friend/accept/{request['from']}", name="/friend/accept/[sender]", catch_response=True) as accept:
                    if accept.status_code in (200, 404):
                        accept.success()

    @task(2)
    def get_friends(self):
        self.client.get("/friends")

    @task
    def create_post(self):
        post_data = {
            "content": f"Post {random.randint(1, 100)}",
        }
        self.client.post("/posts", json=post_data)

    @task
    def get_posts(self):
        self.client.get("/posts", params={"author": self.username})
