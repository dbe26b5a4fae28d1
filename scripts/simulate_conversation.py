#!/usr/bin/env python3
"""
Replay a conversation through the orchestrator from the command line.

Each input line is treated as one transcript update from the partner. Updates
are spaced by --gap seconds so that short gaps exercise the debounce.
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add the parent directory to sys.path to import our modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from signconnect.agents.voice import LoggingSpeechSynthesizer
from signconnect.core.config import get_orchestrator, validate_config


def print_state(state):
    context = state.current_context.label if state.current_context else "-"
    print(f"[#{state.sequence_number}] context: {context}  busy: {state.is_busy}")
    if state.suggestions:
        print(f"    casual: {state.suggestions.casual}")
        print(f"    formal: {state.suggestions.formal}")
        print(f"    quick:  {state.suggestions.quick}")
    if state.last_error:
        print(f"    error:  {type(state.last_error).__name__}: {state.last_error}")


async def replay(lines, gap: float, choose: str = None):
    orchestrator = get_orchestrator(synthesizer=LoggingSpeechSynthesizer())
    orchestrator.subscribe(lambda state: None if state.is_busy else print_state(state))

    for line in lines:
        orchestrator.submit_transcript(line)
        await asyncio.sleep(gap)

    await orchestrator.wait_idle()
    if choose and orchestrator.state.suggestions:
        print(f"Speaking: {orchestrator.choose(choose)}")
    await orchestrator.close()


def main():
    parser = argparse.ArgumentParser(description="Replay transcript updates through the orchestrator")
    parser.add_argument("file", nargs="?", help="File with one transcript update per line (default: stdin)")
    parser.add_argument("--gap", type=float, default=1.5, help="Seconds between updates")
    parser.add_argument("--choose", choices=["casual", "formal", "quick"], help="Speak this suggestion at the end")
    args = parser.parse_args()

    issues = validate_config()
    if issues:
        for issue in issues:
            print(f"Configuration error: {issue}", file=sys.stderr)
        sys.exit(1)

    if args.file:
        lines = Path(args.file).read_text().splitlines()
    else:
        lines = sys.stdin.read().splitlines()

    asyncio.run(replay([line for line in lines if line.strip()], args.gap, args.choose))


if __name__ == "__main__":
    main()
