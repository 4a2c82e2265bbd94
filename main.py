import uvicorn

from orderledger.core.config import settings
from orderledger.main import app

if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)
