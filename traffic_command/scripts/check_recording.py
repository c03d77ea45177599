#!/usr/bin/env python3
"""Validate every traffic command in an MCAP recording.

Usage:
    uv run python traffic_command/scripts/check_recording.py commands.mcap
    uv run python traffic_command/scripts/check_recording.py commands.mcap --config validator.yaml
"""

import argparse
import logging
import sys
from collections import Counter
from pathlib import Path

from traffic_command.codec import validate_message
from traffic_command.config import ActionIdScope, ValidatorConfig, load_validator_config
from traffic_command.recording import read_commands
from traffic_command.validation import ActionIdRegistry, CommandValidator

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


def main() -> int:
    """Validate a recording and print a summary of the violations."""
    parser = argparse.ArgumentParser(description="Validate traffic commands in an MCAP file")
    parser.add_argument("mcap_file", help="Path to MCAP file")
    parser.add_argument("-c", "--config", help="Validator configuration YAML")
    parser.add_argument("-v", "--verbose", action="store_true", help="Print every violation")
    args = parser.parse_args()

    config = load_validator_config(args.config) if args.config else ValidatorConfig()
    validator = CommandValidator(config)
    registry = ActionIdRegistry() if config.action_id_scope == ActionIdScope.SESSION else None

    mcap_path = Path(args.mcap_file)
    logger.info(f"Reading MCAP file: {mcap_path}")

    total = 0
    rejected = 0
    kinds: Counter[str] = Counter()
    for log_time, message in read_commands(mcap_path):
        total += 1
        violations = validate_message(message, validator, registry).violations
        if violations:
            rejected += 1
            kinds.update(type(v).__name__ for v in violations)
            if args.verbose:
                for violation in violations:
                    print(f"{log_time}: {violation}")

    print(f"Checked {total} command(s), {rejected} rejected")
    for kind, count in kinds.most_common():
        print(f"  {kind}: {count}")
    return 1 if rejected else 0


if __name__ == "__main__":
    sys.exit(main())
