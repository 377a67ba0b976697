import sys

from seqstats_pkg.cli import main

if __name__ == '__main__':
    sys.exit(main())
