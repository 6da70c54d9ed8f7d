"""
Lock, unlock and change the password of PDFs
"""
import asyncio
from dragdropdo import Dragdropdo


async def main():
    async with Dragdropdo.from_env() as client:
        upload = await client.upload_file("document.pdf", "document.pdf")

        # Lock
        op = await client.lock_pdf([upload.file_key], "secure-password-123")
        locked = await client.poll_status(op.main_task_id)
        if not locked.is_completed:
            return
        print(f"Protected file: {locked.download_links[0]}")
        locked_key = locked.files_data[0].file_key

        # Change the password
        op = await client.reset_pdf_password([locked_key], "secure-password-123", "new-password-456")
        status = await client.poll_status(op.main_task_id)
        print(f"Password changed: {status.is_completed}")

        # Unlock
        op = await client.unlock_pdf([locked_key], "secure-password-123")
        unlocked = await client.poll_status(op.main_task_id)
        if unlocked.is_completed:
            print(f"Unlocked file: {unlocked.download_links[0]}")


if __name__ == "__main__":
    asyncio.run(main())
