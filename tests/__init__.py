"""Test package for chatdesk.

Structure:
    - unit/: Individual function and class tests
    - integration/: Components working together over real HTTP plumbing

Uses pytest with pytest-asyncio for coroutines and pytest-check for soft
assertions. Fakes stand in for the assistant, the browser and audio devices.
"""
