import sys
import os
import pytest
import tempfile

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

SMTP_ENV_VARS = ["SMTP_SERVER", "SMTP_PORT", "SOCKET_CONNECTION_TIMEOUT", "SOCKET_TIMEOUT"]

@pytest.fixture
def temp_env_file(request):
    """Fixture to create a temporary .env file for testing."""
    with tempfile.NamedTemporaryFile(delete=False, suffix=".env") as temp_file:
        for key in request.param:
            temp_file.write(f"{key}={request.param[key]}\n".encode())
        temp_file_path = temp_file.name

    yield temp_file_path

    # Force cleanup to remove stale files
    if os.path.exists(temp_file_path):
        os.remove(temp_file_path)

@pytest.fixture(autouse=True)
def clear_smtp_environment():
    """load_dotenv writes into os.environ, so drop the SMTP variables around every test."""
    for var in SMTP_ENV_VARS:
        os.environ.pop(var, None)
    yield
    for var in SMTP_ENV_VARS:
        os.environ.pop(var, None)

@pytest.fixture
def log_file():
    """Temporary log file path, removed after the test."""
    path = tempfile.NamedTemporaryFile(delete=False, suffix=".log").name
    yield path
    if os.path.exists(path):
        os.remove(path)
