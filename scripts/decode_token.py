"""
Print the decoded payload of a bearer token and sanity-check its userId.
Usage: python -m scripts.decode_token <token>   (or set SEED_USER_TOKEN)
"""
import json
import os
import sys

from common.tokens import TokenError, decode_payload, looks_like_object_id


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    token = argv[0] if argv else os.getenv("SEED_USER_TOKEN", "")
    if not token:
        print("Usage: python -m scripts.decode_token <token>")
        return 1

    try:
        payload = decode_payload(token)
    except TokenError as e:
        print(f"Could not decode token: {e}")
        return 1

    print("Decoded JWT Payload:")
    print(json.dumps(payload, indent=2))

    user_id = str(payload.get("userId", ""))
    print(f"\nUser ID: {user_id or '(missing)'}")
    print(f"User ID Length: {len(user_id)}")
    print(f"Valid MongoDB ObjectId? {'Yes' if looks_like_object_id(user_id) else 'No'}")
    print(f"Hex representation: {user_id.encode('utf-8').hex()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
