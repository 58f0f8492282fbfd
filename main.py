
import logging
from alerta_crawler.config import SEARCH_KEYWORD, HEADLESS
from alerta_crawler.crawler import AlertaCrawler, BrowserSession


def main():
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    logger = logging.getLogger("Main")
    logger.info("Starting Alerta Licitacao Crawler")

    results = []
    try:
        with BrowserSession(headless=HEADLESS) as session:
            crawler = AlertaCrawler(session)
            results = crawler.run(SEARCH_KEYWORD)
    except Exception as e:
        logger.error(f"Crawler failed: {e}", exc_info=True)
    finally:
        logger.info(f"Crawling finished. Collected {len(results)} items.")


if __name__ == "__main__":
    main()
