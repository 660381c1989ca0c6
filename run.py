#!/usr/bin/env python3
"""
CLI entry point for the hostdesk booking calendar.
"""
from hostdesk.main import main

if __name__ == "__main__":
    main()
