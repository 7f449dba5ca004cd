import sys

from pdfgenstudio_mcp.main import main

sys.exit(main())
