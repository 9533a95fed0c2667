#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Runner for the domestic/foreign paragraph classification experiment.

Example:
    python run_experiment.py --csv data/paragraphs.csv --group-col speech --fast
"""

from speechcv.experiments.pipeline import main


if __name__ == "__main__":
    main()
