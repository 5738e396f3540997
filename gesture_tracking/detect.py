#!/usr/bin/env python3
"""
Gesture Tracking - Webcam Entry Point

Usage:
    gesture-tracking run                 - Recognize configured gestures from the webcam
    gesture-tracking record <gesture>    - Record a new gesture template

Raise a hand to head height to get attention, then perform a gesture.
In record mode the recording starts once attention was taken and the settle delay passed.
"""

import argparse
import logging

import cv2

from gesture_tracking.configuration import CONFIG_PATH, Configuration
from gesture_tracking.events import GestureRecordingEventArgs
from gesture_tracking.session import GestureSession
from gesture_tracking.states.ids import FSMStateId

logger = logging.getLogger("gesture_tracking")

WINDOW_NAME = "Gesture Tracking"


class WebcamRunner:
    """Reads webcam frames, converts them to skeletons and drives a session"""

    def __init__(self, session: GestureSession, source, camera_index: int = 0, display: bool = True):
        self.session = session
        self.source = source
        self.camera_index = camera_index
        self.display = display
        self.status = "Idle - raise a hand"
        self.running = False

        self.session.fsm.state_changed.subscribe(self.on_state_changed)
        self.session.fsm.gesture_recognized.subscribe(self.on_gesture_recognized)

    def on_state_changed(self, sender, args):
        self.status = f"{args.new_state.name}"

    def on_gesture_recognized(self, sender, args):
        self.status = f"Gesture: {args.gesture.id} ({args.gesture.min_distance:.2f})"
        logger.info(f"🎯 {args.gesture.id} -> {args.event.name}")

    def run(self):
        cap = cv2.VideoCapture(self.camera_index)
        if not cap.isOpened():
            raise RuntimeError(f"Could not open camera {self.camera_index}")

        self.running = True
        try:
            while self.running:
                ret, frame = cap.read()
                if not ret:
                    logger.warning("⚠️ No frame from camera, stopping")
                    break

                self.session.process_skeletons(self.source.read_skeleton_frame(frame))

                if self.display:
                    cv2.putText(frame, self.status, (10, 30), cv2.FONT_HERSHEY_SIMPLEX, 0.8, (0, 255, 0), 2)
                    cv2.imshow(WINDOW_NAME, frame)
                    if cv2.waitKey(1) & 0xFF == ord('q'):
                        break
        finally:
            cap.release()
            if self.display:
                cv2.destroyAllWindows()

    def stop(self):
        self.running = False


def record_gesture(runner: WebcamRunner, configuration: Configuration, label: str):
    """Start recording as soon as a skeleton took attention, save on stop"""
    session = runner.session
    recording = session.recording_state

    def on_state_changed(sender, args):
        if args.new_state == FSMStateId.WAITING_FOR_COMMAND and args.old_state != FSMStateId.RECORDING:
            session.start_recording(label)

    def on_recording_starting(sender, args: GestureRecordingEventArgs):
        runner.status = f"Recording {label} in {session.context.pre_recording_idle_seconds}s"

    def on_frame_recorded(sender, args: GestureRecordingEventArgs):
        runner.status = f"Recording {label}: {len(args.frames)} frames"

    def on_recording_stopped(sender, args: GestureRecordingEventArgs):
        configuration.save_gesture(args)
        runner.stop()

    session.fsm.state_changed.subscribe(on_state_changed)
    recording.recording_starting.subscribe(on_recording_starting)
    recording.frame_recorded.subscribe(on_frame_recorded)
    recording.recording_stopped.subscribe(on_recording_stopped)

    runner.run()


def main():
    """Main entry point"""
    parser = argparse.ArgumentParser(description='Skeletal gesture recognition')
    parser.add_argument('command', choices=['run', 'record'], help='What to do')
    parser.add_argument('gesture', nargs='?', help='Gesture id to record')
    parser.add_argument('--config', '-c', default=CONFIG_PATH,
                        help='Path to configuration file')
    parser.add_argument('--gestures-folder', type=str,
                        help='Folder for gesture templates (overrides config)')
    parser.add_argument('--camera', type=int, default=0,
                        help='Camera index')
    parser.add_argument('--model', type=str,
                        help='Path to the MediaPipe pose landmarker .task file')
    parser.add_argument('--no-display', action='store_true',
                        help='Do not open a preview window')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Log per-frame recognition details')

    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    if args.command == 'record' and not args.gesture:
        parser.error("record needs a gesture id")

    configuration = Configuration.from_file(args.config)
    if args.gestures_folder:
        configuration.store.folder = configuration.gestures_folder = args.gestures_folder

    # imported here so the package works without the model runtime
    from gesture_tracking.sensors.mediapipe import MediaPipeSkeletonSource
    source = MediaPipeSkeletonSource(model_path=args.model)

    session = GestureSession(configuration)
    runner = WebcamRunner(session, source, camera_index=args.camera, display=not args.no_display)

    try:
        if args.command == 'record':
            record_gesture(runner, configuration, args.gesture)
        else:
            runner.run()
    except KeyboardInterrupt:
        logger.info("⚠️ Interrupted by user")
    finally:
        source.cleanup()
        logger.info("🧹 Cleanup complete")


if __name__ == '__main__':
    main()
