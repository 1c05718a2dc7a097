import sys

from pyIplcSimLib.sim import main

sys.exit(main())
