"""Novel Formatter: reformat manuscripts for web-fiction platforms."""

import logging
import os
import sys
from pathlib import Path

# Add project directory to path for module imports
sys.path.insert(0, str(Path(__file__).parent))

from dotenv import load_dotenv

# Load .env from the project directory
env_path = Path(__file__).parent / ".env"
load_dotenv(env_path)

PORT = int(os.environ.get("NOVEL_FORMAT_PORT", "5002"))


def main():
    logging.basicConfig(
        level=os.environ.get("NOVEL_FORMAT_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    from web.app import create_app

    app = create_app()
    app.run(host="localhost", port=PORT, debug=False)


if __name__ == "__main__":
    main()
