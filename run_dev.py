from smart_account.config.settings import settings
from smart_account.infrastructure.account_api_server import serve


def main():
    print("Starting DEV account API...")
    serve(settings)


if __name__ == "__main__":
    main()
