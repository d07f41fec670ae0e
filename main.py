"""PySide6 entrypoint: launches the main application window from pdfbinder.main.

Any image paths given on the command line are loaded into the window before
it is shown.
"""

import sys

from pdfbinder.main import main


if __name__ == "__main__":
    sys.exit(main())
