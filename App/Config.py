import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key')
    SQLALCHEMY_DATABASE_URI = os.getenv('SQLALCHEMY_DATABASE_URI', 'sqlite:///travel_planner.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    USERS_FILE = os.getenv('USERS_FILE', 'users.json')
    STATIC_FOLDER = os.getenv('STATIC_FOLDER', 'public')
    CACHE_TIMEOUT = int(os.getenv('CACHE_TIMEOUT', 3600))  # seconds
    MAX_CLIENTS = int(os.getenv('MAX_CLIENTS', 1000))  # controllers kept in memory
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    PORT = int(os.getenv('PORT', 3000))
