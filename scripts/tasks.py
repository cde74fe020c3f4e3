import os
import pathlib
import shutil
import sys

from dotenv import load_dotenv


def clean_cache():
    print("🧹 Cleaning Python cache files...")
    for p in pathlib.Path(".").rglob("__pycache__"):
        shutil.rmtree(p)
    for p in pathlib.Path(".").rglob("*.pyc"):
        p.unlink()
    print("✅ Python cache cleaned")


def clean_test():
    print("🧹 Cleaning test artifacts...")
    for p in [".pytest_cache", "htmlcov"]:
        shutil.rmtree(p, ignore_errors=True)
    pathlib.Path(".coverage").unlink(missing_ok=True)
    print("✅ Test artifacts cleaned")


def clean_build():
    print("🧹 Cleaning build artifacts...")
    for p in ["dist", "build"]:
        shutil.rmtree(p, ignore_errors=True)
    for p in pathlib.Path(".").rglob("*.egg-info"):
        shutil.rmtree(p)
    print("✅ Build artifacts cleaned")


def clean_logs():
    print("🧹 Removing log files...")
    shutil.rmtree("logs", ignore_errors=True)
    print("✅ Logs removed")


def check_env():
    print("🔍 Checking environment configuration...")
    if os.path.exists(".env"):
        print("✅ .env file found")
        load_dotenv()
    else:
        print("⚠️  .env file not found, built-in defaults will be used")
    for name in ("CATALOG_BASE_URL", "DEALS_BASE_URL", "RAWG_API_KEY"):
        state = "set" if os.getenv(name) else "not set"
        print(f"   {name}: {state}")


def main():
    if len(sys.argv) < 2:
        print("Usage: python scripts/tasks.py <command>")
        sys.exit(1)

    command = sys.argv[1]

    commands = {
        "clean-cache": clean_cache,
        "clean-test": clean_test,
        "clean-build": clean_build,
        "clean-logs": clean_logs,
        "check-env": check_env,
    }

    if command in commands:
        commands[command]()
    else:
        print(f"Unknown command: {command}")
        sys.exit(1)


if __name__ == "__main__":
    main()
