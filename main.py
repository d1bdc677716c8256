"""Local development entrypoint.

Serves the API on port 3000, the port the bundled client defaults to.
"""

import os

from goalbingo import create_app

app = create_app()


if __name__ == "__main__":
    app.run(host="127.0.0.1", port=int(os.getenv("PORT", "3000")), debug=False)
