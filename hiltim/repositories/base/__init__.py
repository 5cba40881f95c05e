from hiltim.repositories.base.base_repository import CsvRecordRepository, ParsedRow

__all__ = ["CsvRecordRepository", "ParsedRow"]
