import argparse
import asyncio
import logging
import sys

from responsebot.commands.registry import CommandRegistry
from responsebot.config import Config, ConfigError
from responsebot.integrations.cli import CliIntegration
from responsebot.integrations.discord_integration import DiscordIntegration
from responsebot.orchestrator.dispatcher import MessageDispatcher
from responsebot.services.responses import (
    BackendUnavailableError,
    ResponsesManager,
    ResponseStore,
    open_store,
)
from responsebot.utils.logging.logging_config import setup_logging
from responsebot.utils.logging.metrics import MetricsLogger
from responsebot.utils.logging.request_id_filter import (
    RequestIdContextManager,
    RequestIdFilter,
)
from responsebot.utils.validator import MessageValidator

logger = logging.getLogger("responsebot.main")


def parse_arguments(argv=None):
    parser = argparse.ArgumentParser(description="Trigger response bot")
    parser.add_argument(
        "-v", action=argparse.BooleanOptionalAction, help="Verbose mode", default=False
    )
    parser.add_argument("--config", help="Path to config.yaml", type=str, default=None)
    parser.add_argument(
        "--discord",
        action=argparse.BooleanOptionalAction,
        help="Enable Discord integration",
        default=False,
    )
    parser.add_argument(
        "--discord-token", help="Discord bot token for integration", type=str
    )
    return parser.parse_args(argv)


def init_services(
    store: ResponseStore,
    config: Config,
    metrics_logger: MetricsLogger,
    request_id_context_manager: RequestIdContextManager,
) -> tuple:
    manager = ResponsesManager(store, metrics_logger)
    registry = CommandRegistry().load()
    dispatcher = MessageDispatcher(
        manager,
        registry,
        prefix=config.prefix,
        match_mode=config.match_mode,
        request_id_context_manager=request_id_context_manager,
    )
    return manager, registry, dispatcher


async def run(args, config: Config, store: ResponseStore, request_id_filter: RequestIdFilter):
    request_id_context_manager = RequestIdContextManager(request_id_filter)
    metrics_logger = MetricsLogger(request_id_filter, log_dir=config.log_dir)

    manager, registry, dispatcher = init_services(
        store, config, metrics_logger, request_id_context_manager
    )
    logger.info(
        f"Loaded {len(registry)} commands, prefix {config.prefix!r}, match mode {config.match_mode.value}"
    )

    tasks = []
    if args.discord:
        # Use discord_token if provided, otherwise fall back to config and environment
        token = args.discord_token or config.token
        if not token:
            raise ConfigError("Missing Discord token. Set token in config.yaml or DISCORD_TOKEN.")

        discord_integration = DiscordIntegration(
            dispatcher=dispatcher,
            validator=MessageValidator(),
        )
        tasks.append(asyncio.create_task(discord_integration.start_bot(token)))
    else:
        cli_integration = CliIntegration(dispatcher=dispatcher, user_name="User")
        tasks.append(asyncio.create_task(cli_integration.start()))

    try:
        await asyncio.gather(*tasks)
    except asyncio.CancelledError:
        logger.info("Shutting down services...")
    finally:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        if args.discord and not discord_integration.is_closed():
            await discord_integration.close()
        metrics_logger.close()
        logger.info("Services shut down successfully")


def main(argv=None) -> int:
    args = parse_arguments(argv)

    try:
        config = Config(args.config)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    request_id_filter = RequestIdFilter()
    setup_logging(config.log_level, request_id_filter, config.log_dir, args.v)

    # The bot must not accept messages without a working store
    try:
        store = open_store(config.storage, config.mongo_db_name)
    except BackendUnavailableError as e:
        logger.error(f"Startup error: {e}")
        return 1

    try:
        asyncio.run(run(args, config, store, request_id_filter))
    except KeyboardInterrupt:
        logger.info("Application terminated by user")
    except ConfigError as e:
        logger.error(f"Startup error: {e}")
        return 1
    finally:
        store.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
