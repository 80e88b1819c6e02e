import argparse
import asyncio

from core.config import settings
from core.logging_config import configure_logging, get_logger
from grpc_app.clients.video_client import VideoClient
from grpc_app.server import create_comment_server, create_video_server
from infrastructure.database import close_client, ensure_indexes


logger = get_logger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the comment or video gRPC service")
    parser.add_argument("service", choices=("comment", "video"))
    return parser.parse_args(argv)


async def main(service: str) -> None:
    configure_logging(service=service)

    cfg = settings.grpc if service == "comment" else settings.video_grpc
    address = f"{cfg.host}:{cfg.port}"
    video_client = None
    server = None
    try:
        if service == "comment":
            await ensure_indexes()
            video_client = VideoClient()
            logger.info("video_client_configured", target=settings.video_client.target)
            server = await create_comment_server(video_client, cfg=cfg)
        else:
            server = await create_video_server(cfg=cfg)

        logger.info("grpc_starting", address=address)
        await server.start()
        logger.info("grpc_started", address=address)
        await server.wait_for_termination()
    except (KeyboardInterrupt, asyncio.CancelledError):
        logger.info("grpc_stopping")
        if server is not None:
            await server.stop(grace=5)
    finally:
        if video_client is not None:
            await video_client.close()
        close_client()


if __name__ == "__main__":
    args = parse_args()
    try:
        asyncio.run(main(args.service))
    except KeyboardInterrupt:
        pass
