#!/usr/bin/env python3
"""Load a fixed-width customer purchase file into PostgreSQL.

Connection settings come from DB_HOST, DB_PORT, DB_USER, DB_PASSWORD and
DB_NAME; see ``--help`` for flags that override them.
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from clientes_loader.cli import main

if __name__ == "__main__":
    sys.exit(main())
