#!/usr/bin/env python3
"""
Seed a running MindScope API with demo wellness data.

Posts a few weeks of mood check-ins, journal entries, goals and habits
through the public API so the analytics dashboard has something to show.

Usage:
    python scripts/seed_demo_data.py
    python scripts/seed_demo_data.py --api-url http://localhost:5000 --days 21 --seed 7
"""
import argparse
import random
from datetime import date, timedelta

import httpx

MOOD_TYPES = ["excellent", "good", "neutral", "poor", "terrible"]
MOOD_WEIGHTS = [2, 4, 3, 1, 0.5]

JOURNAL_SNIPPETS = [
    ("Morning pages", "Woke up early and took a slow walk before work. Felt calm and focused."),
    ("Grateful for friends", "Dinner with old friends tonight. Lots of laughing, very grateful."),
    ("Tough meeting", "The review went badly. Need to prepare better and ask for help sooner."),
    ("Weekend plans", "Planning a hike and some reading time. Looking forward to unplugging."),
]

DEMO_GOALS = [
    {
        "title": "Meditate regularly",
        "description": "Build a ten minute daily meditation practice",
        "category": "mental-health",
        "priority": "high",
        "status": "in-progress",
        "milestones": [
            {"title": "Pick a meditation app", "completed": True},
            {"title": "Meditate 7 days in a row", "completed": False},
        ],
    },
    {
        "title": "Run a 5k",
        "description": "Train for the spring charity run",
        "category": "physical-health",
        "priority": "medium",
        "status": "not-started",
    },
]

DEMO_HABITS = [
    {"name": "Drink water", "description": "Eight glasses a day", "category": "health"},
    {"name": "Read 20 minutes", "description": "Fiction or non-fiction", "category": "learning"},
]


def seed_moods(client: httpx.Client, start: date, days: int, rng: random.Random) -> int:
    created = 0
    for offset in range(days):
        day = start + timedelta(days=offset)
        payload = {
            "date": day.isoformat(),
            "moodType": rng.choices(MOOD_TYPES, weights=MOOD_WEIGHTS)[0],
            "intensity": rng.randint(3, 9),
            "energy": rng.randint(2, 9),
            "stress": rng.randint(1, 8),
            "sleep": rng.randint(4, 9),
        }
        response = client.post("/api/moods", json=payload)
        response.raise_for_status()
        created += 1
    return created


def seed_journals(client: httpx.Client, start: date, days: int, rng: random.Random) -> int:
    created = 0
    for offset in range(0, days, 2):
        title, content = rng.choice(JOURNAL_SNIPPETS)
        payload = {
            "date": (start + timedelta(days=offset)).isoformat(),
            "title": title,
            "content": content,
            "category": rng.choice(["reflection", "gratitude", "challenges"]),
        }
        client.post("/api/journals", json=payload).raise_for_status()
        created += 1
    return created


def seed_goals(client: httpx.Client, today: date) -> int:
    for goal in DEMO_GOALS:
        payload = {**goal, "targetDate": (today + timedelta(days=60)).isoformat()}
        client.post("/api/goals", json=payload).raise_for_status()
    return len(DEMO_GOALS)


def seed_habits(client: httpx.Client, today: date, days: int, rng: random.Random) -> int:
    for habit in DEMO_HABITS:
        response = client.post("/api/habits", json=habit)
        response.raise_for_status()
        habit_id = response.json()["data"]["id"]

        # Oldest first so the streak ends on today
        for offset in range(days - 1, -1, -1):
            if offset < 5 or rng.random() < 0.7:
                day = (today - timedelta(days=offset)).isoformat()
                client.patch(f"/api/habits/{habit_id}/toggle", json={"date": day}).raise_for_status()
    return len(DEMO_HABITS)


def main():
    parser = argparse.ArgumentParser(description="Seed the MindScope API with demo data")
    parser.add_argument("--api-url", default="http://127.0.0.1:5000", help="Base URL of the running API")
    parser.add_argument("--days", type=int, default=21, help="Days of history to generate")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for repeatable data")
    args = parser.parse_args()

    rng = random.Random(args.seed)
    today = date.today()
    start = today - timedelta(days=args.days - 1)

    print("=" * 60)
    print("MindScope Demo Data Seeder")
    print("=" * 60)
    print(f"\nAPI: {args.api_url}  History: {args.days} days\n")

    with httpx.Client(base_url=args.api_url, timeout=10.0) as client:
        print(f"  Moods created:    {seed_moods(client, start, args.days, rng)}")
        print(f"  Journals created: {seed_journals(client, start, args.days, rng)}")
        print(f"  Goals created:    {seed_goals(client, today)}")
        print(f"  Habits created:   {seed_habits(client, today, args.days, rng)}")

    print("\n" + "=" * 60)
    print(f"Complete! Open {args.api_url}/api/analytics/dashboard")
    print("=" * 60)


if __name__ == "__main__":
    main()
