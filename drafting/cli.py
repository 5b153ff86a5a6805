from __future__ import annotations

import argparse
import json
from typing import List

from .catalog import index_catalog, load_catalog, resolve
from .config import engine_config_from_env
from .errors import DraftError
from .knowledge import load_synergy_rules
from .persistence import load_draft, save_draft
from .render import render_text
from .report import build_report
from .state_machine import DraftMachine


def _load_env() -> None:
    try:
        from dotenv import load_dotenv  # type: ignore

        load_dotenv()
    except Exception:
        pass


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a scripted champion draft and score both rosters")
    parser.add_argument("--catalog", default=None, help="Path to champion catalog JSON")
    parser.add_argument("--mode", default=None, help="Draft mode (competitive or solo_queue)")
    parser.add_argument(
        "--select", action="append", default=[], help="Champion id or name; repeat in turn order"
    )
    parser.add_argument("--script", default=None, help="JSON file with a list of champions in turn order")
    parser.add_argument("--load", default=None, help="Start from a saved draft JSON")
    parser.add_argument("--save", default=None, help="Path to write the saved draft JSON")
    parser.add_argument("--synergies", default=None, help="Override synergy rules JSON")
    parser.add_argument("--output", default=None, help="Path to output report")
    parser.add_argument(
        "--output-format", choices=["json", "text", "pdf"], default="text", help="Output format"
    )
    parser.add_argument("--debug", action="store_true", help="Print debug logs")
    return parser.parse_args()


def main() -> None:
    _load_env()
    args = _parse_args()
    config = engine_config_from_env()

    catalog_path = args.catalog or config.catalog_path
    if not catalog_path:
        raise SystemExit("No catalog given. Pass --catalog or set DRAFTING_CATALOG.")
    catalog = index_catalog(load_catalog(catalog_path))

    try:
        machine = DraftMachine(args.mode or config.default_mode)
    except DraftError as exc:
        raise SystemExit(str(exc))

    if args.load:
        try:
            result = machine.load(load_draft(args.load, catalog))
        except DraftError as exc:
            raise SystemExit(f"Cannot load {args.load}: {exc}")
        if not result.ok:
            raise SystemExit(f"Cannot load {args.load}: {result.message}")

    selections: List[str] = []
    if args.script:
        with open(args.script, "r", encoding="utf-8") as f:
            selections.extend(str(s) for s in json.load(f))
    selections.extend(args.select)

    for key in selections:
        try:
            entity = resolve(catalog, key)
        except DraftError as exc:
            raise SystemExit(str(exc))
        turn = machine.current_turn
        result = machine.apply_selection(entity)
        if not result.ok:
            raise SystemExit(f"Selection '{key}' rejected ({result.rejection.value}): {result.message}")
        if args.debug and turn is not None:
            print(f"[turn {result.state.turn_index}] {turn.side.value} {turn.action.value} {entity.name}")

    if args.save:
        save_draft(args.save, machine.state)

    synergy_path = args.synergies or config.synergy_rules_path
    rules = load_synergy_rules(str(synergy_path) if synergy_path else None)
    report = build_report(machine.state, rules)

    if args.output_format == "pdf":
        if not args.output:
            raise SystemExit("--output is required for pdf output")
        from .report_pdf import build_pdf_from_report

        build_pdf_from_report(report, args.output)
        return

    if args.output_format == "json":
        output_text = json.dumps(report, indent=2)
    else:
        output_text = render_text(report)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(output_text)
    else:
        print(output_text)


if __name__ == "__main__":
    main()
