"""
Editorial content repository - composition root.
Builds the substrate and the stores once per process and hands them to
consumers. Run directly for an operator summary of the persisted state.
"""
import argparse
import logging
import sys
from dataclasses import dataclass
from typing import Optional, Callable
from utils.config import Config, ConfigurationError
from database.substrate import KeyValueSubstrate, MemorySubstrate, FileSubstrate
from database.redis_client import RedisClient
from stores.article_store import ArticleStore
from stores.account_store import AccountStore
from stores.vocabulary_store import VocabularyStore


def setup_logging(verbose: bool = False):
    """Configure logging for the application."""
    level = logging.DEBUG if verbose else logging.INFO

    # Use UTF-8 encoding for file handler to support Unicode characters
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler('editorial.log', encoding='utf-8')
        ]
    )


@dataclass
class Stores:
    """Store instances shared by every consumer of the process."""
    substrate: KeyValueSubstrate
    articles: ArticleStore
    accounts: AccountStore
    vocabulary: VocabularyStore

    def close(self):
        self.substrate.close()


def build_substrate(config=Config) -> KeyValueSubstrate:
    """
    Create the configured substrate backend.

    Args:
        config: Settings holder (Config class or compatible object)

    Returns:
        KeyValueSubstrate instance
    """
    if config.SUBSTRATE == 'redis':
        return RedisClient(
            host=config.REDIS_HOST,
            port=config.REDIS_PORT,
            db=config.REDIS_DB,
            prefix=config.KEY_PREFIX
        )
    if config.SUBSTRATE == 'file':
        return FileSubstrate(config.DATA_FILE_PATH)
    return MemorySubstrate()


def build_stores(
    config=Config,
    substrate: Optional[KeyValueSubstrate] = None,
    on_logout: Optional[Callable[[], None]] = None
) -> Stores:
    """
    Initialize every store from the substrate.

    Args:
        config: Settings holder
        substrate: Pre-built substrate (built from config when omitted)
        on_logout: Navigation callback invoked after logout

    Returns:
        Stores bundle
    """
    if substrate is None:
        substrate = build_substrate(config)
    return Stores(
        substrate=substrate,
        articles=ArticleStore(substrate, persist=config.PERSIST_ARTICLES),
        accounts=AccountStore(
            substrate,
            admin_email=config.ADMIN_EMAIL,
            admin_password=config.ADMIN_PASSWORD,
            admin_name=config.ADMIN_NAME,
            avatar_base_url=config.AVATAR_BASE_URL,
            on_logout=on_logout
        ),
        vocabulary=VocabularyStore(substrate)
    )


def print_status(stores: Stores):
    """Print a summary of the persisted state."""
    article_stats = stores.articles.get_statistics()
    account_stats = stores.accounts.get_statistics()
    current = stores.accounts.current_account

    print(f"Session:     {stores.accounts.session_state.value}"
          + (f" ({current.email})" if current else ""))
    print(f"Employees:   {account_stats['employees']} in {account_stats['departments']} departments")
    for employee in stores.accounts.employees:
        print(f"  [{employee.id}] {employee.name} <{employee.email}> {employee.position or '-'} / {employee.department or '-'}")
    print(f"Articles:    {article_stats['total']} ({article_stats['featured']} featured)")
    print(f"Categories:  {', '.join(article_stats['categories']) or '-'}")
    print(f"Positions:   {', '.join(stores.vocabulary.positions)}")
    print(f"Departments: {', '.join(stores.vocabulary.departments)}")


def main(argv=None):
    """Main entry point for the operator CLI."""
    parser = argparse.ArgumentParser(
        description='Editorial content repository - inspect persisted state'
    )

    parser.add_argument(
        'command',
        nargs='?',
        default='status',
        choices=['status'],
        help='Command to run (default: status)'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging (DEBUG level)'
    )

    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    try:
        Config.validate()
        logger.info("Configuration validated successfully")
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    try:
        stores = build_stores()
    except Exception as e:
        logger.error(f"Failed to initialize stores: {e}")
        if Config.SUBSTRATE == 'redis':
            logger.error("Please ensure Redis is running")
        sys.exit(1)

    try:
        if args.command == 'status':
            print_status(stores)
    finally:
        stores.close()


if __name__ == "__main__":
    main()
