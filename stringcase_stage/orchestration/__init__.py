"""
Orchestration Layer - Stage Hosting

This layer plays the pipeline runtime's role for local runs.
- Configures, initializes and drives the stage
- No business logic
- Composes transform and load operations
"""
