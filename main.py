"""
Design (main.py)
- Purpose: Launcher so a cron job or CI step can run `python main.py [flags]` from a checkout.
- Outputs: Process exit code from stayalive.runner.main.
"""

from stayalive.runner import main

if __name__ == "__main__":
    raise SystemExit(main())
