import os

from dotenv import load_dotenv

# Load .env from the working directory so local overrides are picked up
load_dotenv()


class Config:
    HOST = os.environ.get("HOST", "127.0.0.1")
    PORT = int(os.environ.get("PORT", "3000"))
    DEBUG = os.environ.get("FLASK_DEBUG", "0") == "1"

    TASKS_FILE = os.environ.get("TASKS_FILE", os.path.join(os.getcwd(), "tasks.json"))
    STATIC_FOLDER = os.environ.get("STATIC_FOLDER", os.path.join(os.getcwd(), "public"))

    # "timestamp" keeps millisecond ids; "monotonic" never repeats an id
    TASK_ID_SCHEME = os.environ.get("TASK_ID_SCHEME", "timestamp")
    SERIALIZE_STORE = os.environ.get("SERIALIZE_STORE", "0") == "1"

    CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "*")
    JSON_SORT_KEYS = False
