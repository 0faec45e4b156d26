import argparse
import os

import uvicorn
from dotenv import load_dotenv
from loguru import logger


def main():
    """
    Run the Pathwise API with uvicorn
    """
    parser = argparse.ArgumentParser(description="Run the Pathwise API")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")

    args = parser.parse_args()

    if not os.path.exists(".env"):
        logger.warning("No .env file found; copy .env.sample and fill in the secrets.")

    load_dotenv(dotenv_path=".env", override=True)

    logger.info(f"Running Pathwise at http://{args.host}:{args.port}")
    logger.info(f"Swagger UI available at http://{args.host}:{args.port}/docs")

    uvicorn.run(
        "pathwise.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload
    )


if __name__ == "__main__":
    main()
