import logging

from relay_agent import env
from relay_agent.audit import audit
from relay_agent.client import RelayClient
from relay_agent.printers import get_provider
from relay_agent.worker import PollWorker


def main():
    logging.basicConfig(level=env.LOG_LEVEL)
    logger = logging.getLogger("relay_agent")

    if not env.AGENT_TOKEN:
        logger.warning("AGENT_TOKEN not set; the relay will reject every poll")

    provider = get_provider()
    printers = provider.list_printers()
    logger.info("Local printers: %s", printers)

    worker = PollWorker(RelayClient(), provider)
    audit("agent_startup", relay=env.RELAY_URL, printers=printers)
    try:
        worker.run_forever()
    except KeyboardInterrupt:
        worker.stop()


if __name__ == "__main__":
    main()
