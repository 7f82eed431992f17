from __future__ import annotations

import argparse

from orderdesk.config import get_settings
from orderdesk.voice.brain import confirm, review
from orderdesk.voice.cart import build_summary
from orderdesk.voice.menu_store import load_catalog


def main() -> None:
    settings = get_settings()

    ap = argparse.ArgumentParser(description="Run a spoken item list against a menu.")
    ap.add_argument("utterance", help='e.g. "idli two, masala idli four, vada one"')
    ap.add_argument("--menu", default="demo", help="menu slug (meta.slug in menu.json)")
    args = ap.parse_args()

    catalog = load_catalog(settings.menus_dir, args.menu)
    if catalog is None:
        raise SystemExit(f"No menu with slug '{args.menu}' under {settings.menus_dir}")

    rows = review(args.utterance, catalog, settings.suggestion_count, settings.match_threshold)
    if not rows:
        print("Nothing recognised.")
        return

    for row in rows:
        head = f"[{row.index}] x{row.phrase.quantity} {row.phrase.name!r}"
        if row.match:
            print(f"{head}  ->  {row.match.name} ({settings.currency_symbol}{row.match.unit_price:.2f})")
            continue
        hints = ", ".join(f"{c.item.name} {c.score:.2f}" for c in row.suggestions) or "none"
        print(f"{head}  ->  no match (did you mean: {hints})")

    result = confirm([r.phrase for r in rows], catalog, {}, [], settings.match_threshold)
    summary, _ = build_summary(result.cart, currency_symbol=settings.currency_symbol)
    print()
    print(summary)
    if result.dropped:
        print(f"\n{len(result.dropped)} item(s) could not be added.")


if __name__ == "__main__":
    main()
