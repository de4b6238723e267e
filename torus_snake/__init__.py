"""
Torus Snake Package
===================

This package contains the snake game core and the adapters around it:

- Grid, snake movement and toroidal wrapping
- Food placement from an injectable random source
- Status state machine (idle, playing, paused, gameover, won)
- Input mapping, tick driver, Gymnasium environment, replays

All tunable parameters are in game_config.yaml.
"""
