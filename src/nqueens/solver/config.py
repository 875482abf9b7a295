"""N-Queens solver configuration."""

from dotenv import find_dotenv
from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Determine the environment file path, or None if not found
ENV_FILE = find_dotenv() or None


class SolverConfig(BaseSettings):
    """Configuration settings for the N-Queens solver.

    Every field can be overridden by an environment variable (or `.env` entry) named after the
    field with an `NQUEENS_` prefix, e.g. `NQUEENS_STEP_DELAY=0.25`.
    """

    min_board_size: int = 4
    """Smallest board size accepted from the command line before clamping. Default: 4."""

    max_board_size: int = 9
    """Largest board size accepted from the command line before clamping. Default: 9."""

    max_solve_size: int = 9
    """Largest board size the solver accepts at all. Default: 9.

    Every level of the search rescans all N x N cells, so traces grow very quickly with N.
    """

    step_delay: float = 0.1
    """Delay in seconds between steps when replaying a trace. Default: 0.1."""

    report_interval: int = 10_000
    """Interval (in number of placements) at which to log progress. Default: 10000."""

    log_dir: str = "logs"
    """Directory for solve logs written by the command-line interface."""

    model_config = SettingsConfigDict(
        env_prefix="NQUEENS_",
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="forbid",
    )

    @model_validator(mode="after")
    def check_bounds(self) -> "SolverConfig":
        """Ensure the board size bounds are positive and consistent."""
        if not 1 <= self.min_board_size <= self.max_board_size <= self.max_solve_size:
            raise ValueError(
                "Expected 1 <= min_board_size <= max_board_size <= max_solve_size, got "
                f"{self.min_board_size}, {self.max_board_size}, {self.max_solve_size}."
            )
        if self.step_delay < 0:
            raise ValueError("step_delay must not be negative.")
        if self.report_interval < 1:
            raise ValueError("report_interval must be positive.")
        return self


config = SolverConfig()
