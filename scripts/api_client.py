"""Lightweight REST client for the prepmate API."""

from __future__ import annotations

import argparse
import json

import httpx


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the prepmate REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("identifiers", nargs="*", help="Opponent identifiers to look up")
    parser.add_argument("--debug", action="store_true", help="Request the raw document prefix")
    parser.add_argument("--health", action="store_true", help="Check API health and exit")
    parser.add_argument(
        "--rating-change",
        nargs=3,
        metavar=("RATING", "OPPONENT", "RESULT"),
        help="Compute the Elo change for one game (RESULT is win, draw or loss)",
    )
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url, timeout=30.0) as client:
        if args.health:
            resp = client.get("/health")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
            return
        if args.rating_change:
            rating, opponent, result = args.rating_change
            resp = client.post(
                "/rating-change",
                json={"current_rating": int(rating), "opponent_rating": int(opponent), "result": result},
            )
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
            return
        if not args.identifiers:
            raise SystemExit("identifiers are required unless --health or --rating-change is given")
        for identifier in args.identifiers:
            resp = client.post("/opponent", json={"id": identifier, "debug": args.debug})
            if resp.status_code == 400:
                raise SystemExit(f"invalid identifier {identifier!r}")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))


if __name__ == "__main__":
    main()
