import sys

from repartition_contentieux.main import main

sys.exit(main())
