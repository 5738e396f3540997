"""
Test suite for Gesture Tracking

Test Organization:
- tracking/     - Feature extraction, tracking context and DTW matching
- states/       - FSM controller and behavior states
- config/       - Configuration loading and validation
- persistence/  - Gesture template files
- sensors/      - Skeleton data shapes and the MediaPipe adapter
"""
