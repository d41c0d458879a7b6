# ups_solver/__main__.py
# Package entrypoint so you can run:
#   python -m ups_solver --help
#
# Examples:
#   python -m ups_solver --example
#   python -m ups_solver --request job.json --out out/ --tolerance 0.5

from __future__ import annotations

from .cli import main

if __name__ == "__main__":
    main()
