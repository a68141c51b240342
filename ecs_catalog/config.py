import os

from ecs_catalog.errors import ConfigError
from ecs_catalog.models.credentials import Credentials


class Config:
    def __init__(self):
        # Credentials
        self.ECS_ACCESS_KEY = os.environ.get("ECS_ACCESS_KEY", "")
        self.ECS_SECRET_KEY = os.environ.get("ECS_SECRET_KEY", "")
        self.ECS_ASSOCIATE_TAG = os.environ.get("ECS_ASSOCIATE_TAG", "")
        
        # Endpoint
        self.ECS_REGION = os.environ.get("ECS_REGION", "com")
        self.REQUEST_TIMEOUT = int(os.environ.get("REQUEST_TIMEOUT", "15"))
        self.VERIFY_SSL = os.environ.get("VERIFY_SSL", "true").lower() == "true"
        self.MAX_CONCURRENT_CHUNKS = int(os.environ.get("MAX_CONCURRENT_CHUNKS", "1"))
        
        # Error tracking
        self.SENTRY_DSN = os.environ.get("SENTRY_DSN", "")
        self.ENVIRONMENT = os.environ.get("ENVIRONMENT", "development")
        
        # Application settings
        self.DEBUG = os.environ.get("DEBUG", "false").lower() == "true"
        self.LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    @property
    def has_credentials(self) -> bool:
        return bool(self.ECS_ACCESS_KEY and self.ECS_SECRET_KEY and self.ECS_ASSOCIATE_TAG)

    @property
    def has_sentry(self) -> bool:
        return bool(self.SENTRY_DSN)

    def credentials(self) -> Credentials:
        """Build immutable credentials, failing if any field is unset."""
        missing = [
            name for name in ("ECS_ACCESS_KEY", "ECS_SECRET_KEY", "ECS_ASSOCIATE_TAG")
            if not getattr(self, name)
        ]
        if missing:
            raise ConfigError(f"Missing catalog credentials: {', '.join(missing)}")
        
        return Credentials(
            access_key=self.ECS_ACCESS_KEY,
            secret_key=self.ECS_SECRET_KEY,
            associate_tag=self.ECS_ASSOCIATE_TAG
        )

# Create an instance
config = Config()
