import sys

from OB_Libs.cli import main


if __name__ == "__main__":
    sys.exit(main())
