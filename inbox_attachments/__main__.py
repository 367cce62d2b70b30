# __main__.py
import sys
from inbox_attachments.main import main

sys.exit(main())
