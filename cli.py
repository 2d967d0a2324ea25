#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
AI-FlowStage Unified CLI Entry Point

Usage:
    python cli.py process --config config.yaml     # Run the stage over input_dir
    python cli.py process -c config.yaml --validate
    python cli.py version                          # Show version info
"""

import argparse
import sys

# Fix Windows console encoding
if sys.platform == 'win32':
    try:
        sys.stdout.reconfigure(encoding='utf-8', errors='replace')
        sys.stderr.reconfigure(encoding='utf-8', errors='replace')
    except Exception:
        pass


def cmd_process(args):
    """Run the stage"""
    from src.core import FlowStageRunner
    from src.models import Outcome

    runner = FlowStageRunner(args.config)

    if args.validate:
        configuration = runner.validate()
        print(f"[OK] Config valid: {args.config}")
        print(f"  - Model: {configuration.model}")
        print(f"  - Input dir: {runner.config['runner'].get('input_dir')}")
        print(f"  - Output dir: {runner.config['runner'].get('output_dir')}")
        print(f"  - Concurrent tasks: {runner.concurrent_tasks}")
        return 0

    counts = runner.run()
    print(f"[OK] success: {counts[Outcome.SUCCESS]}, failure: {counts[Outcome.FAILURE]}")
    return 0


def cmd_version(args):
    """Show version info"""
    from src import __version__
    print(f"AI-FlowStage v{__version__}")
    return 0


def main():
    parser = argparse.ArgumentParser(
        prog="ai-flowstage",
        description="AI-FlowStage: send each record to OpenAI and route the reply",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # process subcommand
    p_process = subparsers.add_parser("process", help="Run the stage")
    p_process.add_argument("-c", "--config", default="config.yaml", help="Config file path")
    p_process.add_argument("--validate", action="store_true", help="Only validate config")
    p_process.set_defaults(func=cmd_process)

    # version subcommand
    p_version = subparsers.add_parser("version", help="Show version info")
    p_version.set_defaults(func=cmd_version)

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 0

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 1
    except Exception as e:
        print(f"\n[ERROR] {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
