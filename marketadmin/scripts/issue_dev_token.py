"""Mint a bearer token for local development.

    python -m marketadmin.scripts.issue_dev_token <auth user id> [minutes]

The token is signed with SECRET_KEY, so it is only accepted by an API that
shares that secret. Refuses to run when APP_ENV is production.
"""

import sys
from datetime import timedelta

from marketadmin.config import settings
from marketadmin.utils.security import create_access_token


def issue_dev_token(argv=None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print("Usage: python -m marketadmin.scripts.issue_dev_token <user_id> [minutes]", file=sys.stderr)
        return 2
    if settings.APP_ENV.lower() == "production":
        print("Refusing to mint tokens when APP_ENV=production", file=sys.stderr)
        return 1

    user_id = args[0]
    try:
        minutes = int(args[1]) if len(args) > 1 else settings.ACCESS_TOKEN_EXPIRE_MINUTES
    except ValueError:
        print("minutes must be an integer", file=sys.stderr)
        return 2

    print(create_access_token({"sub": user_id}, expires_delta=timedelta(minutes=minutes)))
    return 0


if __name__ == "__main__":
    raise SystemExit(issue_dev_token())
