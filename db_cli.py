# db_cli.py - EmberExchange DB CLI
import os, sys, json, argparse
from typing import List

# Ensure local package import works when running directly
sys.path.insert(0, os.path.abspath("."))

# The CLI decides for itself when to seed
os.environ.setdefault("SEED_SAMPLE_DATA", "0")

import sqlalchemy as sa  # type: ignore

from ember import create_app  # type: ignore
from ember.db import db  # type: ignore
from ember.errors import MarketError, classify_integrity_error  # type: ignore
from ember.repositories import (  # type: ignore
    ListingRepository,
    PlayerRepository,
    PriceHistoryRepository,
    StoveRepository,
)
from ember.schema import ensure_sample_data, ensure_schema, reset_schema  # type: ignore
from ember.services import execute_trade  # type: ignore
from ember.unit import UnitOfWork  # type: ignore


def print_rows(rows: List[tuple], headers: List[str]) -> None:
    if not rows:
        print("(no rows)")
        return
    widths = [len(h) for h in headers]
    for r in rows:
        for i, v in enumerate(r):
            widths[i] = max(widths[i], len("" if v is None else str(v)))
    line = " | ".join(h.ljust(widths[i]) for i,h in enumerate(headers))
    print(line)
    print("-+-".join("-"*w for w in widths))
    for r in rows:
        print(" | ".join(("" if v is None else str(v)).ljust(widths[i]) for i,v in enumerate(r)))


def _print_json_rows(rows) -> None:
    data = [r.as_json() for r in rows]
    headers = list(data[0].keys()) if data else []
    print_rows([tuple(d.values()) for d in data], headers)


def cmd_init(args):
    ensure_schema(db.engine)
    print(json.dumps({"ok": True, "schema": "ensured"}, indent=2))


def cmd_reset(args):
    if not args.yes:
        print("Refusing to drop every table without --yes")
        return 1
    reset_schema(db.engine)
    print(json.dumps({"ok": True, "schema": "reset"}, indent=2))


def cmd_seed(args):
    ensure_schema(db.engine)
    with UnitOfWork(db.engine) as unit:
        result = ensure_sample_data(unit)
        unit.commit()
    print(json.dumps({"ok": True, "sample_data": result}, indent=2))


def cmd_players(args):
    with UnitOfWork(db.engine, read_only=True) as unit:
        _print_json_rows(PlayerRepository(unit).all())


def cmd_listings(args):
    with UnitOfWork(db.engine, read_only=True) as unit:
        repo = ListingRepository(unit)
        _print_json_rows(repo.all() if args.all else repo.active())


def cmd_stoves(args):
    with UnitOfWork(db.engine, read_only=True) as unit:
        repo = StoveRepository(unit)
        _print_json_rows(repo.by_owner(args.owner) if args.owner else repo.all())


def cmd_trade(args):
    try:
        result = execute_trade(db.engine, args.listing, args.buyer)
    except sa.exc.IntegrityError as e:
        err = classify_integrity_error(e)
        print(json.dumps({"ok": False, **err.as_json()}, indent=2))
        return 1
    except MarketError as e:
        print(json.dumps({"ok": False, **e.as_json()}, indent=2))
        return 1
    print(json.dumps({"ok": True, **result.as_json()}, indent=2))


def cmd_price_stats(args):
    with UnitOfWork(db.engine, read_only=True) as unit:
        stats = PriceHistoryRepository(unit).stats(args.type)
    if stats is None:
        print(f"No sales recorded for stove type {args.type}")
        return 1
    print(json.dumps(stats.as_json(), indent=2))


def cmd_sql(args):
    # Dangerous but sometimes necessary; use responsibly.
    sql = args.query
    is_select = sql.strip().lower().startswith(("select", "pragma", "with"))
    if is_select:
        with UnitOfWork(db.engine, read_only=True) as unit:
            rows = unit.prepare(sql).many()
        if rows:
            print_rows([tuple(r.values()) for r in rows], list(rows[0].keys()))
        else:
            print("(no rows)")
    else:
        with UnitOfWork(db.engine) as unit:
            res = unit.prepare(sql).execute()
            unit.commit()
        print(json.dumps({"ok": True, "rowcount": res.rows_affected}, indent=2))


def build_parser():
    p = argparse.ArgumentParser(description="EmberExchange DB CLI")
    sub = p.add_subparsers(dest="cmd", required=True)

    s = sub.add_parser("init", help="Create missing tables and indexes")
    s.set_defaults(func=cmd_init)

    s = sub.add_parser("reset", help="Drop and recreate every table")
    s.add_argument("--yes", action="store_true", help="Confirm the drop")
    s.set_defaults(func=cmd_reset)

    s = sub.add_parser("seed", help="Insert the sample data set if missing")
    s.set_defaults(func=cmd_seed)

    s = sub.add_parser("players", help="List players")
    s.set_defaults(func=cmd_players)

    s = sub.add_parser("listings", help="List active listings")
    s.add_argument("--all", action="store_true", help="Include sold and cancelled")
    s.set_defaults(func=cmd_listings)

    s = sub.add_parser("stoves", help="List stoves")
    s.add_argument("--owner", type=int, help="Limit to one owner's stoves")
    s.set_defaults(func=cmd_stoves)

    s = sub.add_parser("trade", help="Execute a trade for a listing")
    s.add_argument("--listing", type=int, required=True)
    s.add_argument("--buyer", type=int, required=True)
    s.set_defaults(func=cmd_trade)

    s = sub.add_parser("price-stats", help="Sale price statistics for a stove type")
    s.add_argument("--type", type=int, required=True)
    s.set_defaults(func=cmd_price_stats)

    s = sub.add_parser("sql", help="Execute raw SQL (danger!)")
    s.add_argument("--query", required=True)
    s.set_defaults(func=cmd_sql)

    return p


def main(argv=None):
    args = build_parser().parse_args(argv)
    app = create_app()
    with app.app_context():
        return args.func(args) or 0


if __name__ == "__main__":
    sys.exit(main())
