# maco/__init__.py
# Purpose: moving-average crossover signal engine (SMA, crossover scan, chart geometry).
