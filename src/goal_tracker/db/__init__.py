"""Database module for the goal tracker."""
