#!/usr/bin/env python3
"""Generate a sample fixed-width customer purchase file.

The output follows the exact layout expected by the loader and can be
used for local runs against a development database.
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from clientes_loader.generators import SampleFileGenerator
from clientes_loader.logging import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Generate a sample fixed-width customer purchase file"
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("base_teste.txt"),
        help="Output file (default: base_teste.txt)",
    )
    parser.add_argument(
        "--records",
        type=int,
        default=1000,
        help="Number of records to generate (default: 1000)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed for reproducibility (default: 42)",
    )
    parser.add_argument(
        "--invalid-rate",
        type=float,
        default=0.05,
        help="Share of records with a broken CPF check digit (default: 0.05)",
    )
    parser.add_argument(
        "--null-rate",
        type=float,
        default=0.2,
        help="Share of records without purchase data (default: 0.2)",
    )
    args = parser.parse_args()

    setup_logging()

    generator = SampleFileGenerator(
        seed=args.seed,
        invalid_document_rate=args.invalid_rate,
        null_rate=args.null_rate,
    )
    path = generator.write(args.output, args.records)
    print(f"Saved {args.records} records to {path}")


if __name__ == "__main__":
    main()
