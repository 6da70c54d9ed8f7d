"""
Handle errors by kind
"""
import asyncio
from dragdropdo import (
    Dragdropdo,
    DragdropdoError,
    ErrorKind,
    APIError,
    ValidationError,
    PollTimeoutError,
)


async def main():
    async with Dragdropdo.from_env() as client:
        try:
            upload = await client.upload_file("example.pdf", "example.pdf")
            op = await client.convert([upload.file_key], "png")
            await client.poll_status(op.main_task_id, interval=1, timeout=30)

        except ValidationError as e:
            print(f"Validation error: {e.message}")
        except APIError as e:
            print(f"API error ({e.status_code}): {e.message}")
            print(f"Error code: {e.code}")
            print(f"Details: {e.details}")
        except PollTimeoutError as e:
            print(f"Still running after {e.timeout}s")
        except DragdropdoError as e:
            # Or branch on the kind
            if e.kind is ErrorKind.NETWORK:
                print(f"Network problem: {e.message}")
            else:
                print(f"{e.kind.value} error: {e.message}")


if __name__ == "__main__":
    asyncio.run(main())
