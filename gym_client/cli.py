"""Command-line front end for the Gym Planner API.

Usage:
    gym-planner list
    gym-planner create "Push Day"

The create command validates the trimmed name with the shared schema
before sending anything, and shows only the first issue.
"""

import argparse
import sys
from typing import List, Optional

from gym_shared.schemas import validate_create_workout

from .api import ClientConfig, ClientError, WorkoutsClient


def list_command(client: WorkoutsClient) -> int:
    workouts = client.get_workouts()
    if not workouts:
        print("No workouts yet. Create one!")
        return 0
    for w in workouts:
        print(f"{w.name}  ({w.created_at.astimezone().date().isoformat()})")
    return 0


def create_command(client: WorkoutsClient, name: str) -> int:
    parsed = validate_create_workout({"name": name.strip()})
    if not parsed.success:
        print(parsed.first_message or "Invalid input", file=sys.stderr)
        return 1
    created = client.create_workout(parsed.data)
    print(f"Created {created.name} ({created.id})")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gym-planner", description="Track your workouts")
    parser.add_argument("--base-url", help="API address (defaults to $API_URL or http://localhost:3000)")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("list", help="List workouts, newest first")
    create = sub.add_parser("create", help="Create a workout")
    create.add_argument("name", help="Workout name (1-120 characters)")
    return parser


def main(argv: Optional[List[str]] = None, client: Optional[WorkoutsClient] = None) -> int:
    args = build_parser().parse_args(argv)
    if client is None:
        config = ClientConfig(args.base_url) if args.base_url else ClientConfig.from_env()
        client = WorkoutsClient(config)
    with client:
        try:
            if args.command == "list":
                return list_command(client)
            return create_command(client, args.name)
        except ClientError as exc:
            print(f"Error: {exc.message}", file=sys.stderr)
            return 1


if __name__ == "__main__":
    sys.exit(main())
