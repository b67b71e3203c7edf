from decouple import Csv, config

CLERK_JWT_KEY = config("CLERK_JWT_KEY", default="")
CLERK_JWKS_URL = config("CLERK_JWKS_URL", default="")
CLERK_ISSUER = config("CLERK_ISSUER", default="")
CLERK_AUTHORIZED_PARTIES = config("CLERK_AUTHORIZED_PARTIES", default="", cast=Csv())
CLERK_ROLE_CLAIM = config("CLERK_ROLE_CLAIM", default="metadata.role")
CLERK_EMAIL_CLAIM = config("CLERK_EMAIL_CLAIM", default="email")
CLERK_SECRET_KEY = config("CLERK_SECRET_KEY", default="")
CLERK_API_URL = config("CLERK_API_URL", default="https://api.clerk.com/v1")
CLERK_ROLE_CACHE_SECONDS = config("CLERK_ROLE_CACHE_SECONDS", default=300, cast=int)
CLERK_LEEWAY_SECONDS = config("CLERK_LEEWAY_SECONDS", default=5, cast=int)
