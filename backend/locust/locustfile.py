"""
Locust Load Test Suite

Run scenarios:
  locust -f locustfile.py --tags conflict     # Many users, one slot
  locust -f locustfile.py --tags throughput   # Venue list cache
  locust -f locustfile.py --tags edge         # Bad input
  locust -f locustfile.py                     # All tests

Venue creation needs an admin account. Point LOCUST_ADMIN_EMAIL and
LOCUST_ADMIN_PASSWORD at one before running.
"""

import os
import random
import string
from datetime import datetime, timezone, timedelta

from locust import HttpUser, task, between, tag, events

ADMIN_EMAIL = os.getenv("LOCUST_ADMIN_EMAIL", "admin@example.com")
ADMIN_PASSWORD = os.getenv("LOCUST_ADMIN_PASSWORD", "admin123")

# Shared state
VENUE_IDS = []
CONFLICT_VENUE_ID = None
# Every ConflictUser asks for this exact slot
CONFLICT_SLOT = (datetime.now(timezone.utc) + timedelta(days=30)).replace(
    hour=10, minute=0, second=0, microsecond=0
)


def random_email():
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=10))
    return f"load_{suffix}@example.com"


def register_and_login(client):
    email = random_email()
    client.post("/api/auth/register", json={
        "email": email,
        "password": "test123",
        "full_name": "Load Tester",
    })
    resp = client.post("/api/auth/login", json={"email": email, "password": "test123"})
    if resp.status_code == 200:
        return {"Authorization": f"Bearer {resp.json()['access_token']}"}
    return {}


def admin_headers(client):
    resp = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    if resp.status_code == 200:
        return {"Authorization": f"Bearer {resp.json()['access_token']}"}
    return {}


def venue_payload(name):
    return {
        "name": name,
        "description": "Load test venue for booking traffic",
        "venue_type": random.choice(["sports", "entertainment", "both"]),
        "location": "Load Test Street 1",
        "capacity": random.randint(10, 5000),
        "amenities": ["parking", "lights"],
        "contact_phone": "+15550001111",
        "contact_email": "venue@example.com",
    }


@events.test_start.add_listener
def on_test_start(environment, **kwargs):
    print("\n" + "=" * 60)
    print(f"SETUP: conflict slot {CONFLICT_SLOT.isoformat()}")
    print("=" * 60)


class ConflictUser(HttpUser):
    """
    TEST 1: Double-booking - N users → 1 slot

    Run: locust -f locustfile.py --tags conflict -u 100 -r 50 --run-time 30s

    After test, verify:
      SELECT COUNT(*) FROM appointments
      WHERE venue_id = X AND status IN ('pending', 'confirmed');
    Anything above 1 is the check-then-insert race showing up.
    """
    wait_time = between(0, 0.1)

    def on_start(self):
        self.headers = register_and_login(self.client)

        if not CONFLICT_VENUE_ID:
            admin = admin_headers(self.client)
            resp = self.client.post("/api/venues/", json=venue_payload("Conflict Arena"), headers=admin)
            if resp.status_code == 201:
                globals()["CONFLICT_VENUE_ID"] = resp.json()["id"]
                print(f"\n✓ Created venue {CONFLICT_VENUE_ID} for the conflict test\n")

    @tag("conflict")
    @task
    def book_same_slot(self):
        if not CONFLICT_VENUE_ID or not self.headers:
            return

        with self.client.post("/api/appointments/",
            json={
                "venue_id": CONFLICT_VENUE_ID,
                "appointment_date": CONFLICT_SLOT.isoformat(),
                "duration_hours": 2,
                "purpose": "Load test booking",
            },
            headers=self.headers,
            catch_response=True
        ) as resp:
            if resp.status_code == 201:
                resp.success()
            elif resp.status_code == 400:
                resp.success()  # Expected: slot taken
            else:
                resp.failure(f"Unexpected: {resp.status_code}")


class ThroughputUser(HttpUser):
    """
    TEST 2: Throughput - venue list cache

    Run twice:
      1. With Redis: locust -f locustfile.py --tags throughput -u 100 -r 20 --run-time 60s
      2. With REDIS_ENABLED=false, run again

    Compare avg response time, requests/sec, P95/P99 latency.
    """
    wait_time = between(0.1, 0.5)

    @tag("throughput", "read")
    @task(10)
    def list_venues_cached(self):
        page = random.randint(1, 5)
        self.client.get(f"/api/venues/?page={page}&limit=20", name="/api/venues/ [cached]")

    @tag("throughput", "read")
    @task(3)
    def venue_availability(self):
        if VENUE_IDS:
            day = (datetime.now(timezone.utc) + timedelta(days=random.randint(1, 30))).date()
            self.client.get(
                f"/api/appointments/availability/{random.choice(VENUE_IDS)}?date={day.isoformat()}",
                name="/api/appointments/availability/{id}",
            )

    @tag("throughput")
    @task(1)
    def health_check(self):
        self.client.get("/health")


class EdgeCaseUser(HttpUser):
    """
    TEST 3: Edge cases - bad input handling

    Run: locust -f locustfile.py --tags edge -u 20 -r 5 --run-time 30s

    Every request should get a 4xx, never a 500.
    """
    wait_time = between(0.5, 1.5)

    def on_start(self):
        self.headers = register_and_login(self.client)

    def _expect(self, resp, codes):
        if resp.status_code in codes:
            resp.success()
        else:
            resp.failure(f"Expected {codes}, got {resp.status_code}")

    @tag("edge")
    @task
    def unknown_venue(self):
        future = (datetime.now(timezone.utc) + timedelta(days=3)).isoformat()
        with self.client.post("/api/appointments/",
            json={"venue_id": 999999, "appointment_date": future, "purpose": "Nowhere at all"},
            headers=self.headers,
            catch_response=True
        ) as resp:
            self._expect(resp, [404])

    @tag("edge")
    @task
    def past_date(self):
        past = (datetime.now(timezone.utc) - timedelta(days=1)).isoformat()
        with self.client.post("/api/appointments/",
            json={"venue_id": 1, "appointment_date": past, "purpose": "Back in time"},
            headers=self.headers,
            catch_response=True
        ) as resp:
            self._expect(resp, [400, 404])

    @tag("edge")
    @task
    def duration_out_of_range(self):
        future = (datetime.now(timezone.utc) + timedelta(days=3)).isoformat()
        with self.client.post("/api/appointments/",
            json={"venue_id": 1, "appointment_date": future, "duration_hours": 48, "purpose": "Too long"},
            headers=self.headers,
            catch_response=True
        ) as resp:
            self._expect(resp, [400])

    @tag("edge")
    @task
    def malformed_json(self):
        with self.client.post("/api/appointments/",
            data="not json at all",
            headers=self.headers,
            catch_response=True
        ) as resp:
            self._expect(resp, [400])

    @tag("edge")
    @task
    def missing_auth(self):
        with self.client.post("/api/appointments/",
            json={"venue_id": 1, "appointment_date": "2030-01-01T10:00:00Z", "purpose": "No token"},
            catch_response=True
        ) as resp:
            self._expect(resp, [401])

    @tag("edge")
    @task
    def user_confirms_own_booking(self):
        with self.client.put("/api/appointments/1/status",
            json={"status": "confirmed"},
            headers=self.headers,
            catch_response=True
        ) as resp:
            self._expect(resp, [403, 404])


class RealisticUser(HttpUser):
    """
    TEST 4: Realistic mixed workload

    Run: locust -f locustfile.py -u 200 -r 20 --run-time 120s

    Mostly browsing, some bookings, occasional cancellations.
    """
    wait_time = between(1, 3)

    def on_start(self):
        self.headers = register_and_login(self.client)
        self.my_appointments = []

    @task(50)
    def browse_venues(self):
        resp = self.client.get("/api/venues/?page=1&limit=20")
        if resp.status_code == 200:
            for venue in resp.json().get("venues", []):
                if venue["id"] not in VENUE_IDS:
                    VENUE_IDS.append(venue["id"])

    @task(20)
    def view_venue(self):
        if VENUE_IDS:
            self.client.get(f"/api/venues/{random.choice(VENUE_IDS)}", name="/api/venues/{id}")

    @task(10)
    def book_venue(self):
        if VENUE_IDS and self.headers:
            start = datetime.now(timezone.utc) + timedelta(days=random.randint(1, 90), hours=random.randint(0, 23))
            resp = self.client.post("/api/appointments/",
                json={
                    "venue_id": random.choice(VENUE_IDS),
                    "appointment_date": start.isoformat(),
                    "duration_hours": random.randint(1, 3),
                    "purpose": "Weekly training session",
                },
                headers=self.headers)
            if resp.status_code == 201:
                self.my_appointments.append(resp.json()["id"])

    @task(5)
    def list_my_appointments(self):
        if self.headers:
            self.client.get("/api/appointments/?page=1&limit=10", headers=self.headers)

    @task(2)
    def cancel_booking(self):
        if self.my_appointments and self.headers:
            appointment_id = self.my_appointments.pop()
            self.client.put(f"/api/appointments/{appointment_id}/status",
                json={"status": "cancelled"},
                headers=self.headers,
                name="/api/appointments/{id}/status")
