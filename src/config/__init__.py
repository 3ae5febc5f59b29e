"""Configuration for the Job Application Tracker."""
