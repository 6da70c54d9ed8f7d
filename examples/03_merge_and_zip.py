"""
Merge several PDFs, then zip the originals
"""
import asyncio
from dragdropdo import Dragdropdo


async def main():
    async with Dragdropdo.from_env() as client:
        names = ["document1.pdf", "document2.pdf", "document3.pdf"]
        keys = []
        for name in names:
            upload = await client.upload_file(name, name)
            keys.append(upload.file_key)

        # Merge
        op = await client.merge(keys)
        status = await client.poll_status(op.main_task_id)
        if status.is_completed:
            print(f"Merged file: {status.download_links[0]}")

        # Zip
        op = await client.zip(keys)
        status = await client.poll_status(op.main_task_id)
        if status.is_completed:
            print(f"Archive: {status.download_links[0]}")


if __name__ == "__main__":
    asyncio.run(main())
