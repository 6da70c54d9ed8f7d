"""
Compress a PDF
"""
import asyncio
from dragdropdo import Dragdropdo


async def main():
    async with Dragdropdo.from_env() as client:
        upload = await client.upload_file("large-file.pdf", "large-file.pdf")

        # Available compression levels
        info = await client.check_supported_operation("pdf", "compress")
        print(f"Compression levels: {info.parameters.get('compression_value')}")

        op = await client.compress([upload.file_key], "recommended")
        status = await client.poll_status(op.main_task_id)

        if status.is_completed:
            print(f"Compressed: {status.download_links[0]}")


if __name__ == "__main__":
    asyncio.run(main())
