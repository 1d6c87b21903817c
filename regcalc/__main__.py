import sys

from regcalc.main import main

sys.exit(main())
