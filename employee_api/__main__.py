import os

import uvicorn


def main() -> None:
    # Run with: python -m employee_api
    host = os.environ.get("HOST", "0.0.0.0")
    port = int(os.environ.get("PORT", "8111"))
    uvicorn.run("employee_api.api.main:app", host=host, port=port)


if __name__ == "__main__":
    main()
