"""Trading bot runtime: configuration, metrics, execution and dispatch."""
