#!/usr/bin/env python3
import argparse

from sqlmodel import Session

from visaconnect.db.init_db import init_db
from visaconnect.db.session import engine
from visaconnect.models.enums import UserRole
from visaconnect.services.auth_service import get_user_by_email, set_user_role


def main() -> int:
    parser = argparse.ArgumentParser(description='Grant or revoke the admin role for a user.')
    parser.add_argument('email')
    parser.add_argument('--revoke', action='store_true', help='Demote the user back to a regular user')
    args = parser.parse_args()

    init_db()
    with Session(engine) as session:
        user = get_user_by_email(session, args.email)
        if user is None:
            print(f'no user registered with {args.email}')
            return 1
        role = UserRole.USER if args.revoke else UserRole.ADMIN
        set_user_role(session, user, role)
    print(f'{args.email} is now {role.value}')
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
