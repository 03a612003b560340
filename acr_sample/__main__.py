import sys

from acr_sample.main import main

sys.exit(main())
