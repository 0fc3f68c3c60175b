#!/usr/bin/env python3
"""
Step Collector Simulator for the Step Activity API.

Stands in for the mobile pedometer client: builds the same ingestion
envelopes the phone sends and posts them to the API over HTTP.

Usage:
    python scripts/step_simulator.py --scenario walk --interval 10 --count 30
    python scripts/step_simulator.py --scenario backfill --days 14 --trend 150
    python scripts/step_simulator.py --scenario summary
    python scripts/step_simulator.py --scenario reset
"""

import os
import sys
import json
import time
import uuid
import random
import argparse
import platform
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import httpx
from dotenv import load_dotenv


# Load environment variables
load_dotenv()

API_URL = os.getenv("ACTIVITY_API_URL", "http://localhost:4000")

# Walking energy cost in METs
WALKING_MET = 3.5

# Stride length as a fraction of body height
STRIDE_FACTOR = 0.414


@dataclass
class UserProfile:
    """Body measurements used for the distance and calorie estimates."""

    weight_kg: float = 72.0
    height_cm: float = 175.0

    @property
    def stride_length(self) -> float:
        """Stride length in meters."""
        return (self.height_cm / 100) * STRIDE_FACTOR

    def estimate_distance(self, steps: int) -> float:
        return steps * self.stride_length

    def estimate_calories(self, start: datetime, end: datetime) -> float:
        """MET-based calorie estimate; windows shorter than a second count as one second."""
        duration_hours = max((end - start).total_seconds(), 1) / 3600
        return WALKING_MET * self.weight_kg * duration_hours


def default_device(device_id: Optional[str] = None) -> Dict[str, str]:
    """Device block of the ingestion envelope."""
    return {
        "deviceId": device_id or os.getenv("SIMULATOR_DEVICE_ID") or str(uuid.uuid4()),
        "model": "Step Simulator",
        "osVersion": platform.release() or "unknown",
    }


def _iso(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def build_envelope(
    device: Dict[str, str],
    steps: int,
    start: datetime,
    end: datetime,
    profile: UserProfile,
) -> Dict[str, Any]:
    """Build the ``{device, sample}`` envelope the mobile client posts."""
    return {
        "device": dict(device),
        "sample": {
            "steps": int(steps),
            "distance": round(profile.estimate_distance(steps), 2),
            "calories": round(profile.estimate_calories(start, end), 2),
            "start": _iso(start),
            "end": _iso(end),
        },
    }


def is_unchanged(previous: Optional[Dict[str, Any]], current: Dict[str, Any]) -> bool:
    """True when a new reading adds nothing over the last uploaded one."""
    if previous is None:
        return False
    before, after = previous["sample"], current["sample"]
    return (
        before["steps"] == after["steps"]
        and abs(before["calories"] - after["calories"]) < 0.01
        and abs(before["distance"] - after["distance"]) < 0.5
    )


def generate_backfill_envelopes(
    device: Dict[str, str],
    profile: UserProfile,
    days: int,
    base_steps: int,
    trend: int = 0,
    variance: int = 0,
    cadence: int = 100,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> List[Dict[str, Any]]:
    """
    One walking session per day for the ``days`` days before ``now``.

    Args:
        device: Device block
        profile: User profile for the estimates
        days: Number of past days to generate, oldest first
        base_steps: Steps on the oldest day
        trend: Steps added per day
        variance: Uniform noise in steps (+/-)
        cadence: Steps per minute, sets each session's duration
        now: Reference time (defaults to the current UTC time)
        rng: Random source for the noise
    """
    now = now or datetime.now(timezone.utc)
    rng = rng or random.Random()
    today = now.astimezone(timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0)

    envelopes = []
    for index in range(days):
        day = today - timedelta(days=days - index)
        steps = base_steps + trend * index
        if variance:
            steps += rng.randint(-variance, variance)
        steps = max(steps, 0)

        start = day + timedelta(hours=8)
        end = start + timedelta(minutes=max(steps / cadence, 1))
        envelopes.append(build_envelope(device, steps, start, end, profile))
    return envelopes


def post_sample(client: httpx.Client, envelope: Dict[str, Any]) -> Dict[str, Any]:
    """Post one envelope and return the API response body."""
    response = client.post("/api/metrics", json=envelope)
    response.raise_for_status()
    return response.json()


def run_walk_scenario(
    client: httpx.Client,
    device: Dict[str, str],
    profile: UserProfile,
    interval: float,
    count: Optional[int],
    cadence: int,
):
    """Live session: fixed start, advancing end, cumulative step count."""
    print(f"\n[SCENARIO] Walking at ~{cadence} steps/min, pushing every {interval}s")

    start = datetime.now(timezone.utc)
    last_uploaded = None
    steps = 0
    sent = 0

    while count is None or sent < count:
        time.sleep(interval)
        steps += max(int(random.gauss(cadence * interval / 60, cadence * interval / 600)), 0)
        envelope = build_envelope(device, steps, start, datetime.now(timezone.utc), profile)

        if is_unchanged(last_uploaded, envelope):
            print("[SKIP] No new activity since last upload")
            continue

        result = post_sample(client, envelope)
        last_uploaded = envelope
        sent += 1
        print(f"[PUSH] {steps} steps -> {result['status']} ({result['id']})")


def run_backfill_scenario(
    client: httpx.Client,
    device: Dict[str, str],
    profile: UserProfile,
    days: int,
    base_steps: int,
    trend: int,
    variance: int,
    seed: Optional[int],
):
    """Post a history of daily sessions so streaks and forecasts have data."""
    print(f"\n[SCENARIO] Backfilling {days} days from {base_steps} steps (trend {trend:+d}/day)")

    envelopes = generate_backfill_envelopes(
        device,
        profile,
        days=days,
        base_steps=base_steps,
        trend=trend,
        variance=variance,
        rng=random.Random(seed),
    )
    for envelope in envelopes:
        result = post_sample(client, envelope)
        sample = envelope["sample"]
        print(f"[PUSH] {sample['end'][:10]}: {sample['steps']} steps -> {result['status']}")


def main():
    parser = argparse.ArgumentParser(
        description="Step Collector Simulator for the Step Activity API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Live walk, one push every 10 seconds, 30 pushes
  python scripts/step_simulator.py --scenario walk --interval 10 --count 30

  # Two weeks of history trending upward
  python scripts/step_simulator.py --scenario backfill --days 14 --base-steps 6000 --trend 250

  # Print the current summary
  python scripts/step_simulator.py --scenario summary

  # Clear the server store
  python scripts/step_simulator.py --scenario reset
        """,
    )
    parser.add_argument(
        "--scenario",
        choices=["walk", "backfill", "summary", "reset"],
        default="walk",
        help="Scenario to run (default: walk)",
    )
    parser.add_argument(
        "--url",
        default=API_URL,
        help=f"API base URL (default: {API_URL})",
    )
    parser.add_argument(
        "--device-id",
        help="Device identifier (default: SIMULATOR_DEVICE_ID or a random UUID)",
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=10.0,
        help="Seconds between pushes in the walk scenario (default: 10)",
    )
    parser.add_argument(
        "--count",
        type=int,
        help="Number of pushes in the walk scenario (default: unlimited)",
    )
    parser.add_argument(
        "--cadence",
        type=int,
        default=100,
        help="Steps per minute (default: 100)",
    )
    parser.add_argument(
        "--days",
        type=int,
        default=14,
        help="Days of history for backfill (default: 14)",
    )
    parser.add_argument(
        "--base-steps",
        type=int,
        default=7000,
        help="Steps on the oldest backfilled day (default: 7000)",
    )
    parser.add_argument(
        "--trend",
        type=int,
        default=0,
        help="Steps added per backfilled day (default: 0)",
    )
    parser.add_argument(
        "--variance",
        type=int,
        default=500,
        help="Random +/- noise in backfilled steps (default: 500)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for reproducible backfills",
    )
    parser.add_argument(
        "--weight",
        type=float,
        default=72.0,
        help="Body weight in kg (default: 72)",
    )
    parser.add_argument(
        "--height",
        type=float,
        default=175.0,
        help="Body height in cm (default: 175)",
    )

    args = parser.parse_args()

    # Validate arguments
    if args.interval <= 0:
        parser.error("--interval must be positive")
    if args.cadence <= 0:
        parser.error("--cadence must be positive")
    if args.days < 0:
        parser.error("--days must not be negative")

    print("=" * 60)
    print("Step Collector Simulator")
    print("=" * 60)
    print(f"[INFO] API: {args.url}")

    device = default_device(args.device_id)
    profile = UserProfile(weight_kg=args.weight, height_cm=args.height)

    try:
        with httpx.Client(base_url=args.url, timeout=10.0) as client:
            if args.scenario == "walk":
                run_walk_scenario(client, device, profile, args.interval, args.count, args.cadence)
            elif args.scenario == "backfill":
                run_backfill_scenario(
                    client,
                    device,
                    profile,
                    args.days,
                    args.base_steps,
                    args.trend,
                    args.variance,
                    args.seed,
                )
            elif args.scenario == "summary":
                response = client.get("/api/summary")
                response.raise_for_status()
                print(json.dumps(response.json(), indent=2))
            elif args.scenario == "reset":
                response = client.delete("/api/metrics")
                response.raise_for_status()
                print("[INFO] Server store cleared")

        print("\n[INFO] Simulation complete")

    except KeyboardInterrupt:
        print("\n[INFO] Interrupted by user")
    except httpx.HTTPError as e:
        print(f"\n[ERROR] {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
