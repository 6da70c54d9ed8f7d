"""
Custom configuration, logging and legacy deployments
"""
import asyncio
import logging
from dragdropdo import Dragdropdo, ClientConfig, ProtocolVariant, setup_logging


async def main():
    logging.basicConfig(format='%(asctime)s %(name)s %(levelname)s %(message)s')
    setup_logging(logging.DEBUG)

    # Proxy and longer timeout
    config = ClientConfig.with_proxy("your-api-key", "http://proxy:8080", timeout=120)
    async with Dragdropdo(config=config) as client:
        upload = await client.upload_file(b"hello world", "hello.txt", parts=1)
        print(f"Uploaded: {upload.file_key}")

    # Legacy deployment: X-API-Key auth, no completion step
    async with Dragdropdo(api_key="your-api-key", variant=ProtocolVariant.D3) as client:
        upload = await client.upload_file("photo.jpg", "photo.jpg", mime_type="image/jpeg")
        op = await client.share([upload.file_key])
        status = await client.poll_status(op.main_task_id, interval=1.0, timeout=60)
        print(f"Share links: {status.download_links}")


if __name__ == "__main__":
    asyncio.run(main())
