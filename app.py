from __future__ import annotations

import os

from ebd_tracker import create_app

app = create_app()


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "3000")), debug=app.config["DEBUG"])
