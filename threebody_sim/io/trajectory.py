"""Trajectory CSV writing and loading.

Format: one header row ``time,body0_x,body0_y,body0_z,body1_x,...`` followed by
one row per step, every value in fixed-point notation with 8 decimals.
"""

import csv
from pathlib import Path
from typing import List, Optional, Sequence, Tuple
import numpy as np
from threebody_sim.physics.body import Body

VALUE_FORMAT = "{:.8f}"


class TrajectoryError(ValueError):
    """Raised when a trajectory file is malformed."""


def trajectory_header(n_bodies: int) -> List[str]:
    header = ["time"]
    for idx in range(n_bodies):
        header.extend([f"body{idx}_x", f"body{idx}_y", f"body{idx}_z"])
    return header


class TrajectoryWriter:
    """Row-oriented trajectory sink."""

    def __init__(self, output_path: str):
        """Open (create or truncate) the output file.

        Raises:
            OSError: If the file cannot be created
        """
        self.output_path = Path(output_path)
        self._file = open(self.output_path, 'w', newline='')
        self._writer = csv.writer(self._file, lineterminator='\n')

    @property
    def closed(self) -> bool:
        return self._file.closed

    def write_header(self, n_bodies: int):
        self._writer.writerow(trajectory_header(n_bodies))

    def write_row(self, time: float, bodies: Sequence[Body]):
        """Append time and every body's position."""
        row = [VALUE_FORMAT.format(time)]
        for body in bodies:
            row.extend(VALUE_FORMAT.format(value) for value in body.position)
        self._writer.writerow(row)

    def flush(self):
        self._file.flush()

    def close(self):
        if not self._file.closed:
            self._file.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


class TrajectoryData:
    """Per-body position series loaded from a trajectory file."""

    def __init__(self, times: np.ndarray, positions: np.ndarray):
        """Initialize trajectory data.

        Args:
            times: Sample times (num_frames,)
            positions: Positions (num_frames, num_bodies, 3)
        """
        self.times = times
        self.positions = positions

    @property
    def num_frames(self) -> int:
        return self.positions.shape[0]

    @property
    def num_bodies(self) -> int:
        return self.positions.shape[1]

    def body_positions(self, body: int) -> np.ndarray:
        """Position series (num_frames, 3) of one body."""
        return self.positions[:, body, :]

    def get_position(self, body: int, frame: int) -> Optional[np.ndarray]:
        if not (0 <= body < self.num_bodies and 0 <= frame < self.num_frames):
            return None
        return self.positions[frame, body]

    def camera_target(self, frame: int = 0, min_distance: float = 1e9) -> Tuple[np.ndarray, float]:
        """Centroid of the bodies at ``frame`` and the largest distance from it.

        The distance is clamped to ``min_distance`` so very compact systems
        still get a usable view extent.
        """
        frame_positions = self.positions[frame]
        centroid = frame_positions.mean(axis=0)
        max_distance = float(np.max(np.linalg.norm(frame_positions - centroid, axis=1)))
        return centroid, max(max_distance, min_distance)

    @classmethod
    def load_csv(cls, input_path: str) -> "TrajectoryData":
        """Load a trajectory file.

        The body count is inferred from the first data row as
        (columns - 1) / 3; every later row must have the same column count.

        Raises:
            OSError: If the file cannot be read
            TrajectoryError: If the contents are malformed
        """
        times = []
        frames = []
        num_fields = None

        with open(input_path, 'r', newline='') as f:
            reader = csv.reader(f)
            header = next(reader, None)
            if header is None:
                raise TrajectoryError(f"Empty trajectory file: {input_path}")

            for line_number, record in enumerate(reader, start=2):
                if not record:
                    continue
                if num_fields is None:
                    if len(record) < 4:
                        raise TrajectoryError(
                            "Trajectory must have at least time and one body (4 columns)"
                        )
                    num_fields = len(record)
                elif len(record) != num_fields:
                    raise TrajectoryError(
                        f"Line {line_number}: expected {num_fields} fields, found {len(record)}"
                    )

                try:
                    values = [float(field) for field in record]
                except ValueError as e:
                    raise TrajectoryError(f"Line {line_number}: invalid value ({e})") from e

                num_bodies = (num_fields - 1) // 3
                times.append(values[0])
                frames.append(np.array(values[1:1 + 3 * num_bodies]).reshape(num_bodies, 3))

        if not frames:
            raise TrajectoryError("No bodies found in trajectory data")

        return cls(np.array(times), np.stack(frames))
