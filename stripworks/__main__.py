import sys

from stripworks.main import main

sys.exit(main())
