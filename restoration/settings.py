import os
import sys
from pathlib import Path
import environ
import yaml

# Initialize environment variables
env = environ.Env()

# Reading .env file
environ.Env.read_env(".env")


def read_secret(env_var_name, file_env_var_name, default=""):
    """Read secret from file if *_FILE env var exists, otherwise from env var."""
    secret_file = os.environ.get(file_env_var_name)
    if secret_file and os.path.exists(secret_file):
        with open(secret_file, 'r') as f:
            return f.read().strip()
    return env(env_var_name, default=default)


# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent
CONFIG_DIR = BASE_DIR / "restoration" / "config"


# Load application configuration
def load_app_config():
    config_path = Path(env("APP_CONFIG_PATH", default=str(CONFIG_DIR / "application.yml")))
    if not config_path.exists():
        return {}

    with open(config_path) as f:
        return yaml.safe_load(f) or {}


APP_CONFIG = load_app_config()

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = read_secret("SECRET_KEY", "SECRET_KEY_FILE", default="unsafe-secret-key")

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = env.bool("DEBUG", default=False)

ALLOWED_HOSTS = env.list("ALLOWED_HOSTS", default=["localhost", "127.0.0.1"])

TESTING = (len(sys.argv) > 1 and sys.argv[1] == 'test') or os.environ.get('TESTING', 'False').lower() == 'true'


# Application definition
INSTALLED_APPS = [
    "restoration",
    "django.contrib.contenttypes",
    "django_celery_results",
]

# Celery
CELERY_BROKER_URL = env('CELERY_BROKER_URL', default="redis://127.0.0.1:6379/0")
CELERY_RESULT_BACKEND = "django-db"
CELERY_TASK_ACKS_LATE = env.bool('CELERY_TASK_ACKS_LATE', default=True)
CELERY_WORKER_PREFETCH_MULTIPLIER = 1

# Database
DATABASES = {
    "default": {
        "NAME": env("DB_NAME", default=str(BASE_DIR / "db.sqlite3")),
        "ENGINE": env("DB_ENGINE", default="django.db.backends.sqlite3"),
        "HOST": env("DB_HOST", default=""),
        "PORT": env("DB_PORT", default=""),
        "USER": env("DB_USER", default=""),
        "PASSWORD": read_secret("DB_PASSWORD", "DATABASE_PASSWORD_FILE", default=""),
        "CONN_MAX_AGE": 0,
        "CONN_HEALTH_CHECKS": True,
    }
}

if TESTING:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": ":memory:",
            "CONN_MAX_AGE": 0,
        }
    }
    TEST_RUNNER = 'restoration.tests.runner.CleanupTestRunner'

# Internationalization
LANGUAGE_CODE = "en-us"

TIME_ZONE = "UTC"

USE_I18N = True

USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"


# ==========================================
# POLYGON VALIDATION
# ==========================================

_validation_config = APP_CONFIG.get('validation', {}) or {}

POLYGON_VALIDATION = {
    # Polygons handled per batch job step
    'CHUNK_SIZE': env.int('VALIDATION_CHUNK_SIZE', default=_validation_config.get('chunk_size', 50)),
    'MAX_PAGE_SIZE': env.int('VALIDATION_MAX_PAGE_SIZE', default=_validation_config.get('max_page_size', 1000)),
    'MAX_POLYGON_HECTARES': env.float(
        'VALIDATION_MAX_POLYGON_HECTARES',
        default=_validation_config.get('max_polygon_hectares', 1000),
    ),
    'AREA_LOWER_BOUND_MULTIPLIER': env.float(
        'VALIDATION_AREA_LOWER_BOUND_MULTIPLIER',
        default=_validation_config.get('area_lower_bound_multiplier', 0.75),
    ),
    'AREA_UPPER_BOUND_MULTIPLIER': env.float(
        'VALIDATION_AREA_UPPER_BOUND_MULTIPLIER',
        default=_validation_config.get('area_upper_bound_multiplier', 1.25),
    ),
    'MIN_PLANT_START_DATE': env(
        'VALIDATION_MIN_PLANT_START_DATE',
        default=str(_validation_config.get('min_plant_start_date', '2018-01-01')),
    ),
    # Degrees; vertices with a sharper angle are reported as spikes
    'SPIKE_ANGLE_THRESHOLD': env.float(
        'VALIDATION_SPIKE_ANGLE_THRESHOLD',
        default=_validation_config.get('spike_angle_threshold', 5.0),
    ),
}


# ==========================================
# LOGGING CONFIGURATION
# ==========================================

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {module} {process:d} {thread:d} {message}',
            'style': '{',
        },
        'simple': {
            'format': '{levelname} {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple' if TESTING else 'verbose',
        },
        'null': {
            'class': 'logging.NullHandler',
        },
    },
    'root': {
        'handlers': ['null' if TESTING else 'console'],
        'level': 'CRITICAL' if TESTING else 'INFO',
    },
    'loggers': {
        'django': {
            'handlers': ['null' if TESTING else 'console'],
            'level': 'CRITICAL' if TESTING else 'INFO',
            'propagate': False,
        },
        'django.db.backends': {
            'handlers': ['null'],
            'level': 'CRITICAL',
            'propagate': False,
        },
        'restoration': {
            'handlers': ['null' if TESTING else 'console'],
            'level': 'CRITICAL' if TESTING else env('VALIDATION_LOG_LEVEL', default='INFO'),
            'propagate': False,
        },
        'celery': {
            'handlers': ['null' if TESTING else 'console'],
            'level': 'CRITICAL' if TESTING else 'WARNING',
            'propagate': False,
        },
    }
}
