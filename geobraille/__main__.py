import sys

from geobraille.cli import main

sys.exit(main())
