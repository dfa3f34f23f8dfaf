#!/usr/bin/env python3
"""
Calorie Tracker CLI Application

A command-line application for keeping a running calorie total.

Features:
- Add foods with their calorie count
- See every entry and the running total
- Remove single entries
- Reset the tracker after confirmation
- Entries are saved between sessions

Usage:
    python main.py

    Or if made executable:
    ./main.py
"""

from cli import run

if __name__ == "__main__":
    run()
