"""Replay the worked quotes in config/scenarios.yaml against the calculator.

Usage:
    python scripts/check_scenarios.py
"""

import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from src.calculators.scenarios import check_scenario, load_scenarios

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


def main() -> int:
    """Check every scenario; exit non-zero if any fail."""
    scenarios = load_scenarios()
    failed = 0
    for scenario in scenarios:
        mismatches = check_scenario(scenario)
        if mismatches:
            failed += 1
            logger.info("  [FAIL] %s", scenario["name"])
            for line in mismatches:
                logger.info("         %s", line)
        else:
            logger.info("  [PASS] %s", scenario["name"])

    logger.info("%d/%d scenarios passed", len(scenarios) - failed, len(scenarios))
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
