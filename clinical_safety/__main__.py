import sys

from clinical_safety.cli import main

sys.exit(main())
