"""
Main entry point for the pistachio climate analysis system.

Reads weather records from a JSON file, runs the analysis pipeline and writes
the JSON report.
"""

import json
import sys
from pathlib import Path
from typing import Any, List, Optional

from .core import Config, setup_logger, LoggerContext
from .models.variety import Location
from .pipeline import ClimateAnalysisPipeline


class PistachioClimateApp:
    """Main application for pistachio climate analysis."""

    def __init__(self, config_file: Optional[str] = None, timezone: Optional[str] = None):
        """
        Initialize application.

        Args:
            config_file: Path to configuration file
            timezone: Overrides the configured timezone for hourly data
        """
        overrides = {"processing": {"timezone": timezone}} if timezone else None
        self.config = Config(config_file, overrides=overrides)

        self.logger = setup_logger(log_level=self.config.log_level, to_file=self.config.log_to_file)
        self.logger.info("=" * 60)
        self.logger.info("Pistachio Climate Analysis")
        self.logger.info("=" * 60)
        self.logger.info(f"Configuration: {self.config}")

        self.pipeline = ClimateAnalysisPipeline(
            config=self.config,
            source_units=self.config.get("units", {}),
            logger=self.logger
        )

    def load_records(self, input_file: str) -> List[Any]:
        """
        Load raw records from a JSON file.

        The file holds a list of records, or an object with a ``records``,
        ``data`` or ``hourly`` list.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If no record list is found
        """
        path = Path(input_file)
        if not path.exists():
            raise FileNotFoundError(f"Input file not found: {input_file}")

        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)

        if isinstance(data, dict):
            for key in ("records", "data", "hourly"):
                if isinstance(data.get(key), list):
                    data = data[key]
                    break

        if not isinstance(data, list):
            raise ValueError(f"No list of records found in {input_file}")

        self.logger.info(f"Loaded {len(data)} raw records from {input_file}")
        return data

    def run(
        self,
        input_file: str,
        latitude: float,
        longitude: float,
        hourly: bool = False,
        output_file: Optional[str] = None
    ) -> dict:
        """
        Run the analysis for one site.

        Args:
            input_file: JSON file with daily rows or hourly observations
            latitude: Site latitude (degrees)
            longitude: Site longitude (degrees)
            hourly: Whether the input holds hourly observations
            output_file: Where to write the JSON report; stdout when None

        Returns:
            The analysis result
        """
        try:
            rows = self.load_records(input_file)
            location = Location(latitude=latitude, longitude=longitude)

            with LoggerContext(self.logger, "climate analysis"):
                result = self.pipeline.run(rows, location, hourly=hourly)

            suitability = result["site"]["suitability"]
            best = result["varieties"]["report"]["summary"]
            self.logger.info(f"Site suitability: {suitability['score']}/100")
            self.logger.info(f"Best variety: {best['best_variety']} ({best['best_score']})")

            self.write_result(result, output_file)
            self.logger.info("Processing complete")
            return result

        except Exception as e:
            self.logger.error(f"Application error: {e}", exc_info=True)
            raise

    def write_result(self, result: dict, output_file: Optional[str]) -> None:
        text = json.dumps(result, ensure_ascii=False, indent=2)
        if output_file is None:
            print(text)
            return

        path = Path(output_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        self.logger.info(f"Report written to {output_file}")


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Pistachio climate suitability and cultivar recommendation"
    )
    parser.add_argument(
        "--input",
        type=str,
        required=True,
        help="JSON file with daily records (or hourly observations with --hourly)"
    )
    parser.add_argument("--latitude", type=float, required=True, help="Site latitude (degrees)")
    parser.add_argument("--longitude", type=float, required=True, help="Site longitude (degrees)")
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to configuration file"
    )
    parser.add_argument(
        "--hourly",
        action="store_true",
        help="Input holds hourly observations to aggregate into days"
    )
    parser.add_argument(
        "--timezone",
        type=str,
        default=None,
        help="Site timezone for hourly data (e.g. Europe/Madrid)"
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output JSON file. Default: stdout"
    )

    args = parser.parse_args()

    if not -90 <= args.latitude <= 90:
        print(f"Invalid latitude: {args.latitude}. Must be between -90 and 90")
        sys.exit(1)

    try:
        app = PistachioClimateApp(config_file=args.config, timezone=args.timezone)
        app.run(
            input_file=args.input,
            latitude=args.latitude,
            longitude=args.longitude,
            hourly=args.hourly,
            output_file=args.output,
        )
    except Exception as e:
        print(f"Application failed: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
