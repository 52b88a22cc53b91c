"""Summarize run logs: wins, losses and move mix per player name."""

import re
import sys
from collections import defaultdict
from pathlib import Path

SCRIPT_DIR = Path(__file__).parent
PROJECT_ROOT = SCRIPT_DIR.parent
LOGS_DIR = PROJECT_ROOT / "data" / "logs"

PLAYER_RE = re.compile(r"Joining game as (\S+)")
OUTCOME_RE = re.compile(r"Run (won|lost)")
DECISION_RE = re.compile(r"DECISION: (forward|backtrack|stalled)")


def analyze_log(filepath: Path) -> dict | None:
    """Count outcomes and decisions in a single log file.

    Returns dict with keys: player, wins, losses, forward, backtrack,
    stalled, or None if the log never joined a game.
    """
    player = None
    counts = defaultdict(int)

    with open(filepath, errors="replace") as f:
        for line in f:
            if player is None:
                m = PLAYER_RE.search(line)
                if m:
                    player = m.group(1)

            m = OUTCOME_RE.search(line)
            if m:
                counts["wins" if m.group(1) == "won" else "losses"] += 1
                continue

            m = DECISION_RE.search(line)
            if m:
                counts[m.group(1)] += 1

    if player is None:
        return None

    return {
        "player": player,
        "wins": counts["wins"],
        "losses": counts["losses"],
        "forward": counts["forward"],
        "backtrack": counts["backtrack"],
        "stalled": counts["stalled"],
    }


def main():
    logs_dir = LOGS_DIR
    if len(sys.argv) > 1:
        logs_dir = Path(sys.argv[1])

    if not logs_dir.is_dir():
        print(f"Logs directory not found: {logs_dir}", file=sys.stderr)
        sys.exit(1)

    log_files = sorted(logs_dir.glob("*.log"))
    if not log_files:
        print(f"No log files found in {logs_dir}", file=sys.stderr)
        sys.exit(1)

    totals: dict[str, dict[str, int]] = defaultdict(lambda: defaultdict(int))
    skipped = 0

    for lf in log_files:
        result = analyze_log(lf)
        if result is None:
            skipped += 1
            continue
        player = result.pop("player")
        totals[player]["logs"] += 1
        for key, value in result.items():
            totals[player][key] += value

    print(f"Analyzed {len(log_files) - skipped} logs across {len(totals)} player(s) "
          f"({skipped} logs skipped)\n")

    print("| Player | Logs | Wins | Losses | Win rate | Forward | Backtrack | Stalled |")
    print("|--------|-----:|-----:|-------:|---------:|--------:|----------:|--------:|")
    for player, t in sorted(totals.items(), key=lambda kv: kv[1]["wins"], reverse=True):
        games = t["wins"] + t["losses"]
        rate = t["wins"] / games if games else 0.0
        print(f"| {player} | {t['logs']} | {t['wins']} | {t['losses']} | {rate * 100:.1f}% "
              f"| {t['forward']} | {t['backtrack']} | {t['stalled']} |")


if __name__ == "__main__":
    main()
