import sys

from exchange_services.cli import main


sys.exit(main())
