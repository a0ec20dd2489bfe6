# scripts/mint_dev_token.py
"""
本機開發用：簽一張 local ID token（AUTH_PROVIDER=local 時可用）。

    AUTH_PROVIDER=local python scripts/mint_dev_token.py dev-user dev@example.com
"""
import sys

from app.core.config import get_settings
from app.core.security import create_local_token


def main(argv: list) -> None:
    uid = argv[1] if len(argv) > 1 else "dev-user"
    email = argv[2] if len(argv) > 2 else None
    settings = get_settings()
    if settings.AUTH_PROVIDER != "local":
        print("warning: AUTH_PROVIDER is not 'local'; the server will reject this token", file=sys.stderr)
    print(create_local_token(settings, uid, email=email))


if __name__ == "__main__":
    main(sys.argv)
