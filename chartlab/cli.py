"""
chartlab CLI - technical indicators from the command line.

Usage:
    python -m chartlab list [--category CATEGORY]
    python -m chartlab calc INDICATOR --input FILE [--param KEY=VALUE ...] [--full]
    python -m chartlab presets [--enabled]
    python -m chartlab preset PRESET_ID --input FILE
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from chartlab.adapters import read_bars
from chartlab.config import ChartlabConfig, ConfigError, load_config
from chartlab.domain import ChartlabError, IndicatorCategory, IndicatorNotFoundError, PresetBook
from chartlab.domain.indicators import default_registry
from chartlab.domain.indicators.alignment import align_to_timestamps
from chartlab.presentation import (
    build_indicator_response,
    descriptor_to_response,
    format_catalog,
    format_indicator_table,
    to_json,
)

logger = logging.getLogger(__name__)


def parse_param(raw: str) -> tuple[str, Any]:
    """Parse KEY=VALUE, converting VALUE to int or float where possible."""
    if "=" not in raw:
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got '{raw}'")
    key, value = raw.split("=", 1)
    key, value = key.strip(), value.strip()
    if not key:
        raise argparse.ArgumentTypeError(f"empty parameter name in '{raw}'")
    for convert in (int, float):
        try:
            return key, convert(value)
        except ValueError:
            continue
    return key, value


def _emit(text: str, output: str | None) -> None:
    if output:
        Path(output).write_text(text)
        print(f"Written to {output}", file=sys.stderr)
    else:
        print(text)


def _build_preset_book(config: ChartlabConfig) -> PresetBook:
    book = PresetBook()
    for preset_id in config.presets.enabled:
        if book.get(preset_id) is None:
            logger.warning(f"Configured preset not found: {preset_id}")
            continue
        book.enable(preset_id)
    return book


def cmd_list(args: argparse.Namespace, config: ChartlabConfig) -> int:
    """List available indicators."""
    category = IndicatorCategory(args.category) if args.category else None
    infos = [descriptor_to_response(d) for d in default_registry.describe_all(category)]

    if args.format == "json":
        print(json.dumps([to_json(i) for i in infos], indent=2))
    else:
        print(format_catalog(infos))
    return 0


def cmd_calc(args: argparse.Namespace, config: ChartlabConfig) -> int:
    """Calculate one indicator over a bar file."""
    indicator = default_registry.get(args.indicator)
    if indicator is None:
        raise IndicatorNotFoundError(args.indicator, source="cli")

    # --param flags override config values, in either key spelling
    params = indicator.public_params(config.params_for(args.indicator))
    params.update(indicator.public_params(dict(args.param or [])))

    bars = read_bars(args.input)
    logger.info(f"Calculating {args.indicator} over {len(bars)} bars")

    response = build_indicator_response(
        indicator,
        bars,
        params,
        full=args.full,
        precision=config.output.float_precision,
    )

    if args.format == "table":
        _emit(format_indicator_table(response, config.output.float_precision), args.output)
    else:
        _emit(json.dumps(to_json(response), indent=2), args.output)
    return 0


def cmd_presets(args: argparse.Namespace, config: ChartlabConfig) -> int:
    """Show indicator presets."""
    book = _build_preset_book(config)
    presets = book.enabled() if args.enabled else book.all()

    for preset in presets:
        state = "on " if preset.enabled else "off"
        params = ", ".join(f"{k}={v}" for k, v in preset.params.items())
        print(f"[{state}] {preset.id:<8} {preset.name:<16} {preset.category.value:<11} {params}")
    return 0


def cmd_preset(args: argparse.Namespace, config: ChartlabConfig) -> int:
    """Calculate a preset's primary line over a bar file."""
    book = _build_preset_book(config)
    bars = read_bars(args.input)
    values = book.calculate(args.preset, bars)

    preset = book.get(args.preset)
    indicator = book.registry.get(preset.indicator)
    offset = indicator.output_offset(preset.params)
    precision = config.output.float_precision

    points = [
        {"x": p.timestamp, "y": round(p.value, precision)}
        for p in align_to_timestamps(values, bars, offset)
        if p.value is not None
    ]
    _emit(json.dumps({"preset": preset.id, "points": points}, indent=2, default=str), args.output)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chartlab",
        description="Technical indicators for price charts",
    )
    parser.add_argument("-c", "--config", help="Path to config TOML file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # List command
    list_parser = subparsers.add_parser("list", help="List available indicators")
    list_parser.add_argument(
        "--category",
        choices=[c.value for c in IndicatorCategory],
        help="Only show one category",
    )
    list_parser.add_argument(
        "-f", "--format", choices=["json", "table"], default="table", help="Output format"
    )
    list_parser.set_defaults(func=cmd_list)

    # Calc command
    calc_parser = subparsers.add_parser("calc", help="Calculate an indicator")
    calc_parser.add_argument("indicator", help="Indicator id (e.g. sma, rsi, macd)")
    calc_parser.add_argument("-i", "--input", required=True, help="CSV or JSON bar file")
    calc_parser.add_argument(
        "-p", "--param",
        action="append",
        type=parse_param,
        metavar="KEY=VALUE",
        help="Indicator parameter (repeatable)",
    )
    calc_parser.add_argument("--full", action="store_true", help="All lines of multi-line indicators")
    calc_parser.add_argument(
        "-f", "--format", choices=["json", "table"], default=None, help="Output format"
    )
    calc_parser.add_argument("-o", "--output", help="Output file path")
    calc_parser.set_defaults(func=cmd_calc)

    # Presets command
    presets_parser = subparsers.add_parser("presets", help="Show indicator presets")
    presets_parser.add_argument("--enabled", action="store_true", help="Only enabled presets")
    presets_parser.set_defaults(func=cmd_presets)

    # Preset command
    preset_parser = subparsers.add_parser("preset", help="Calculate a preset")
    preset_parser.add_argument("preset", help="Preset id (e.g. sma20, rsi14)")
    preset_parser.add_argument("-i", "--input", required=True, help="CSV or JSON bar file")
    preset_parser.add_argument("-o", "--output", help="Output file path")
    preset_parser.set_defaults(func=cmd_preset)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if getattr(args, "format", "unset") is None:
        args.format = config.output.format

    try:
        return args.func(args, config)
    except ChartlabError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
