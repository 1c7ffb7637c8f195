from ..settings import Settings

class DevelopmentSettings(Settings):
    debug: bool = True
    mongodb_database: str = "foodchefDB_dev"
