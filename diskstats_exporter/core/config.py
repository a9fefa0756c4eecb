from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    PORT: int = 9000
    HOST: str = "0.0.0.0"
    DEV: bool = False

    DISKSTATS_PATH: str = "/proc/diskstats"
    METRIC_PREFIX: str = "linuxstats.diskstats"
    # minimum seconds between two reads of DISKSTATS_PATH
    REFRESH_INTERVAL_SECONDS: float = 5.0

    LOG_LEVEL: str = "INFO"

settings = Settings()
