"""ecsdog: scrape ECS service state into DogStatsD gauges and events."""

__version__ = "0.1.0"
