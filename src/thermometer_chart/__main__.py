# src/thermometer_chart/__main__.py
"""
Entry point for running the thermometer_chart package as a module.

This allows running: python -m thermometer_chart
"""

from thermometer_chart.cli.commands import main

if __name__ == "__main__":
    main()
