"""
Locust Load Test Suite

Run scenarios:
  locust -f locustfile.py --tags concurrency  # Same court slot, many members
  locust -f locustfile.py --tags coach        # Same coach, different courts
  locust -f locustfile.py --tags edge         # Bad input
  locust -f locustfile.py                     # All tests

Start the API with SIMULATED_LATENCY_MS=200 to widen the race window.
"""

import random
from datetime import date, timedelta

from locust import HttpUser, between, events, tag, task

# One contested slot per run, far enough ahead to be empty
CONTESTED_DAY = date.today() + timedelta(days=random.randint(30, 300))
CONTESTED_SLOT = f"{CONTESTED_DAY}T19:00:00"
COURT_IDS = ["c1", "c2", "c3"]


def random_email():
    return f"load_{random.randint(100000, 999999)}@test.com"


@events.test_start.add_listener
def on_test_start(environment, **kwargs):
    print("\n" + "=" * 60)
    print(f"Contested slot: {CONTESTED_SLOT}")
    print("=" * 60)


class MemberUser(HttpUser):
    """Signs up a fresh member and keeps their id as X-User-Id."""

    abstract = True

    def on_start(self):
        resp = self.client.post("/api/v1/auth/signup", json={
            "name": "Load Member",
            "email": random_email(),
        })
        self.headers = {"X-User-Id": resp.json()["id"]} if resp.status_code == 201 else {}


class ConcurrencyUser(MemberUser):
    """
    TEST 1: Court double-booking - N members -> 1 court slot

    Run: locust -f locustfile.py --tags concurrency -u 100 -r 50 --run-time 30s

    After test, verify:
      GET /api/v1/bookings/by-date?date=<CONTESTED_DAY>&court_id=c1
    Should list exactly one booking at 19:00
    """
    wait_time = between(0, 0.1)

    @tag("concurrency")
    @task
    def book_contested_slot(self):
        if not self.headers:
            return

        with self.client.post("/api/v1/bookings/",
            json={"court_id": "c1", "slot_start": CONTESTED_SLOT},
            headers=self.headers,
            catch_response=True,
        ) as resp:
            if resp.status_code in (201, 409):
                resp.success()  # 409: slot already taken
            else:
                resp.failure(f"Unexpected: {resp.status_code}")


class CoachUser(MemberUser):
    """
    TEST 2: Coach double-commit - one coach, three courts, same hour

    Run: locust -f locustfile.py --tags coach -u 60 -r 30 --run-time 30s

    After test, GET /api/v1/coaches/coach2/bookings (as admin1) should hold
    one booking at the contested hour.
    """
    wait_time = between(0, 0.1)

    @tag("coach")
    @task
    def book_contested_coach(self):
        if not self.headers:
            return

        with self.client.post("/api/v1/bookings/",
            json={
                "court_id": random.choice(COURT_IDS),
                "slot_start": CONTESTED_SLOT.replace("T19", "T11"),
                "coach_id": "coach2",
            },
            headers=self.headers,
            catch_response=True,
            name="/api/v1/bookings/ [coach]",
        ) as resp:
            if resp.status_code in (201, 409):
                resp.success()
            else:
                resp.failure(f"Unexpected: {resp.status_code}")


class EdgeCaseUser(MemberUser):
    """
    TEST 3: Edge cases - Bad input handling

    Run: locust -f locustfile.py --tags edge -u 20 -r 5 --run-time 30s

    System should NOT crash, return proper error codes.
    """
    wait_time = between(0.5, 1.5)

    def _expect(self, resp, allowed):
        if resp.status_code in allowed:
            resp.success()
        else:
            resp.failure(f"Expected {allowed}, got {resp.status_code}")

    @tag("edge")
    @task
    def unknown_court(self):
        with self.client.post("/api/v1/bookings/",
            json={"court_id": "nope", "slot_start": CONTESTED_SLOT},
            headers=self.headers,
            catch_response=True,
        ) as resp:
            self._expect(resp, (404,))

    @tag("edge")
    @task
    def misaligned_slot(self):
        with self.client.post("/api/v1/bookings/",
            json={"court_id": "c2", "slot_start": CONTESTED_SLOT.replace(":00:00", ":30:00")},
            headers=self.headers,
            catch_response=True,
        ) as resp:
            self._expect(resp, (422,))

    @tag("edge")
    @task
    def too_many_rackets(self):
        with self.client.post("/api/v1/bookings/",
            json={"court_id": "c2", "slot_start": CONTESTED_SLOT, "add_ons": {"rackets": 99}},
            headers=self.headers,
            catch_response=True,
        ) as resp:
            self._expect(resp, (422,))

    @tag("edge")
    @task
    def malformed_json(self):
        with self.client.post("/api/v1/bookings/",
            data="not json at all",
            headers=self.headers,
            catch_response=True,
        ) as resp:
            self._expect(resp, (400, 422))

    @tag("edge")
    @task
    def missing_caller(self):
        with self.client.post("/api/v1/bookings/",
            json={"court_id": "c2", "slot_start": CONTESTED_SLOT},
            catch_response=True,
        ) as resp:
            self._expect(resp, (401,))


class RealisticUser(MemberUser):
    """
    TEST 4: Realistic mixed workload

    Run: locust -f locustfile.py -u 200 -r 20 --run-time 120s

    Mostly quoting and checking the grid, occasional bookings and cancels.
    """
    wait_time = between(1, 3)

    def on_start(self):
        super().on_start()
        self.booking_ids = []

    def _random_slot(self):
        day = date.today() + timedelta(days=random.randint(1, 14))
        return day, random.randint(8, 21)

    @task(30)
    def quote(self):
        day, hour = self._random_slot()
        self.client.get("/api/v1/pricing/quote", params={
            "court_id": random.choice(COURT_IDS),
            "date": str(day),
            "hour": hour,
            "rackets": random.randint(0, 2),
        }, name="/api/v1/pricing/quote")

    @task(20)
    def view_grid(self):
        day, _ = self._random_slot()
        self.client.get("/api/v1/availability/grid", params={"date": str(day)},
            name="/api/v1/availability/grid")

    @task(8)
    def book(self):
        if not self.headers:
            return
        day, hour = self._random_slot()
        with self.client.post("/api/v1/bookings/",
            json={"court_id": random.choice(COURT_IDS), "slot_start": f"{day}T{hour:02d}:00:00"},
            headers=self.headers,
            catch_response=True,
        ) as resp:
            if resp.status_code == 201:
                self.booking_ids.append(resp.json()["id"])
                resp.success()
            elif resp.status_code == 409:
                resp.success()

    @task(2)
    def cancel(self):
        if self.booking_ids:
            self.client.delete(f"/api/v1/bookings/{self.booking_ids.pop()}",
                headers=self.headers, name="/api/v1/bookings/{id}")
