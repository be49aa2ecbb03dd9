import os

class Config:
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///repairdesk.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    DEFAULT_TAX_RATE = float(os.getenv("DEFAULT_TAX_RATE", 0))  # POS fallback
    APP_NAME = os.getenv("APP_NAME", "RepairDesk")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_DIR = os.getenv("LOG_DIR")

class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    LOG_DIR = None
    DEFAULT_TAX_RATE = 0.0
