import sys

from acme_dns_hook.cli import main

sys.exit(main())
