import sys

from content_server.main import main

sys.exit(main())
