import logging
import os

import uvicorn

from buildgen.main import app

logger = logging.getLogger("buildgen")

if __name__ == "__main__":
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "3000"))
    logger.info("Starting buildgen backend on http://%s:%d", host, port)
    uvicorn.run(app, host=host, port=port, workers=1)
