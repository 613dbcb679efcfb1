import os

import uvicorn


def main() -> None:
    uvicorn.run("inventory_service.app:app", host="0.0.0.0", port=int(os.environ.get("PORT", "8082")))


if __name__ == "__main__":
    main()
