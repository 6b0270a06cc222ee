import sys

from clientes_loader.cli import main

sys.exit(main())
