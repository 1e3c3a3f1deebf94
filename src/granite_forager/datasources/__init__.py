"""External data source integrations.

    datasources/
    ├── inaturalist/      # citizen-science observations
    │   ├── client.py     # API URLs, constants, rate limiting, caching
    │   └── observations.py  # raw record -> Observation
    └── reports.py        # user foraging reports (read side)

Data sources fetch and normalize only. Matching, geography and statistics
live in ``analysis/``.
"""
