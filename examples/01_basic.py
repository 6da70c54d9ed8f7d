"""
Upload a file, convert it and wait for the result
"""
import asyncio
from dragdropdo import Dragdropdo


async def main():
    async with Dragdropdo.from_env() as client:

        # Upload with progress
        upload = await client.upload_file(
            "example.pdf",
            "example.pdf",
            on_progress=lambda p: print(f"Upload progress: {p.percentage}%")
        )
        print(f"Uploaded: {upload.file_key}")

        # What can be done with a PDF?
        supported = await client.check_supported_operation("pdf")
        print(f"Available actions: {supported.available_actions}")

        # Is PDF -> PNG supported?
        check = await client.check_supported_operation("pdf", "convert", {"convert_to": "png"})
        print(f"Convert to PNG supported: {check.supported}")

        # Convert and wait
        op = await client.convert([upload.file_key], "png", notes={"userId": "user-123"})
        status = await client.poll_status(
            op.main_task_id,
            on_update=lambda s: print(f"Status: {s.operation_status.value}")
        )

        if status.is_completed:
            for f in status.files_data:
                print(f"{f.file_key}: {f.download_link}")
        else:
            for f in status.files_data:
                print(f"{f.file_key} failed: {f.error_message}")


if __name__ == "__main__":
    asyncio.run(main())
