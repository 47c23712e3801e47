"""HTTP API for the goal tracker."""
