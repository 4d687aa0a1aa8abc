"""Allow `python -m employee_api` to start the server."""

from employee_api.main import run

if __name__ == "__main__":
    run()
