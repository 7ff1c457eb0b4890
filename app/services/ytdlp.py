from typing import Any, AsyncIterator, Dict, List, NamedTuple, Optional
from collections import deque
from contextlib import suppress
import asyncio
import json
from app.config.settings import config
from app.core.exceptions import CollaboratorFailure
from app.core.state import state
from app.models.internal import RawFormat, VideoMetadata

STDERR_MAX_LINES = 50

class CompletedProcess(NamedTuple):
    """Subprocess result"""
    returncode: int
    stdout: bytes
    stderr: bytes

class SubprocessExecutor:
    """Execute subprocess with consistent error handling"""

    @staticmethod
    async def run(
        cmd: List[str],
        timeout: Optional[float] = None
    ) -> CompletedProcess:
        """
        Run subprocess and collect its output.
        The child is killed if the wait is cancelled or times out.
        """
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            stdin=asyncio.subprocess.DEVNULL
        )

        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(),
                timeout=timeout
            )

            return CompletedProcess(
                returncode=process.returncode,
                stdout=stdout,
                stderr=stderr
            )

        except BaseException:
            if process.returncode is None:
                with suppress(ProcessLookupError):
                    process.kill()
                await process.wait()
            raise

class YTDLPCommandBuilder:
    """Build yt-dlp commands"""

    @staticmethod
    def _base() -> List[str]:
        cmd = [config.ytdlp.binary, '--no-playlist', '--no-warnings']
        if state.js_runtime:
            cmd.extend(['--js-runtimes', state.js_runtime])
        return cmd

    @staticmethod
    def build_version_command() -> List[str]:
        return [config.ytdlp.binary, '--version']

    @staticmethod
    def build_info_command(url: str) -> List[str]:
        """Build command for fetching video info"""
        cmd = YTDLPCommandBuilder._base()
        cmd.append('--dump-json')
        # '--' keeps a URL starting with '-' from being read as an option
        cmd.extend(['--', url])
        return cmd

    @staticmethod
    def build_stream_command(url: str, format_str: str) -> List[str]:
        """Build command for streaming download to stdout"""
        cmd = YTDLPCommandBuilder._base()
        cmd.extend([
            '-f', format_str,
            '-o', '-',
            # Keep stdout clean: it carries the media bytes
            '--no-progress',
            '--quiet',
        ])
        cmd.extend(['--', url])
        return cmd

def error_message(stderr_lines) -> str:
    """Pick the most useful line out of yt-dlp's stderr"""
    lines = [line for line in stderr_lines if line]
    for line in reversed(lines):
        if line.startswith('ERROR:'):
            return line
    return '\n'.join(lines[-5:])[:500]

def _decode_lines(raw: bytes) -> List[str]:
    return [line.strip() for line in raw.decode(errors='replace').splitlines()]

def _quality_label(f: Dict[str, Any], has_video: bool) -> Optional[str]:
    height = f.get('height')
    if not has_video or not height:
        return None
    fps = f.get('fps')
    if fps and fps > 30:
        return f"{height}p{int(round(fps))}"
    return f"{height}p"

def parse_format(f: Dict[str, Any]) -> RawFormat:
    """Normalize one entry of yt-dlp's 'formats' list"""
    vcodec = f.get('vcodec')
    acodec = f.get('acodec')

    # yt-dlp uses 'none' for an absent stream; null audio codec means unknown, not absent
    if vcodec is not None:
        has_video = vcodec != 'none'
    else:
        has_video = bool(f.get('height') or f.get('width'))
    has_audio = acodec != 'none'

    content_length = f.get('filesize') or f.get('filesize_approx')

    return RawFormat(
        format_id=f.get('format_id'),
        quality_label=_quality_label(f, has_video),
        quality=f.get('format_note'),
        has_video=has_video,
        has_audio=has_audio,
        content_length=int(content_length) if content_length else None,
    )

def parse_metadata(info: Dict[str, Any]) -> VideoMetadata:
    """Normalize a yt-dlp --dump-json document"""
    thumbnails = [t['url'] for t in info.get('thumbnails') or [] if t.get('url')]
    if not thumbnails and info.get('thumbnail'):
        thumbnails = [info['thumbnail']]

    return VideoMetadata(
        title=info.get('title') or '',
        length_seconds=int(info.get('duration') or 0),
        view_count=info.get('view_count'),
        thumbnails=thumbnails,
        author=info.get('uploader') or info.get('channel'),
        formats=[parse_format(f) for f in info.get('formats') or []],
    )

class YtDlpClient:
    """
    The extraction collaborator.

    Resolves a URL to metadata and byte streams by running yt-dlp. Every
    failure leaves this class as CollaboratorFailure carrying yt-dlp's message.
    """

    async def version(self) -> str:
        try:
            result = await SubprocessExecutor.run(YTDLPCommandBuilder.build_version_command(), timeout=10.0)
        except (OSError, asyncio.TimeoutError) as e:
            raise CollaboratorFailure(str(e) or type(e).__name__)
        if result.returncode != 0:
            raise CollaboratorFailure(error_message(_decode_lines(result.stderr)), result.returncode)
        return result.stdout.decode().strip()

    async def get_info(self, url: str) -> VideoMetadata:
        cmd = YTDLPCommandBuilder.build_info_command(url)
        try:
            result = await SubprocessExecutor.run(cmd)
        except OSError as e:
            raise CollaboratorFailure(str(e))

        if result.returncode != 0:
            raise CollaboratorFailure(error_message(_decode_lines(result.stderr)), result.returncode)

        try:
            info = json.loads(result.stdout.decode())
        except (json.JSONDecodeError, UnicodeDecodeError):
            raise CollaboratorFailure("Failed to parse yt-dlp output")

        return parse_metadata(info)

    async def download(self, url: str, format_str: str) -> AsyncIterator[bytes]:
        """
        Start yt-dlp and wait for its first chunk.

        Failures before any byte is produced raise CollaboratorFailure here,
        so callers can still answer with an error status. The returned
        generator kills the process when it is closed or cancelled early.
        """
        chunk_size = config.ytdlp.chunk_size
        cmd = YTDLPCommandBuilder.build_stream_command(url, format_str)

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                stdin=asyncio.subprocess.DEVNULL
            )
        except OSError as e:
            raise CollaboratorFailure(str(e))

        stderr_lines = deque(maxlen=STDERR_MAX_LINES)

        async def drain_stderr():
            """Drain stderr to prevent buffer deadlock"""
            while True:
                line = await process.stderr.readline()
                if not line:
                    break
                stderr_lines.append(line.decode(errors='replace').strip())

        stderr_task = asyncio.create_task(drain_stderr())

        async def shutdown():
            if process.returncode is None:
                with suppress(ProcessLookupError):
                    process.kill()
            stderr_task.cancel()
            await process.wait()
            with suppress(asyncio.CancelledError):
                await stderr_task

        try:
            first = await process.stdout.read(chunk_size)
            if not first:
                returncode = await process.wait()
                await stderr_task
                if returncode != 0:
                    raise CollaboratorFailure(error_message(stderr_lines), returncode)
        except BaseException:
            await shutdown()
            raise

        async def generate():
            try:
                if first:
                    yield first
                while True:
                    chunk = await process.stdout.read(chunk_size)
                    if not chunk:
                        break
                    yield chunk

                returncode = await process.wait()
                await stderr_task
                if returncode != 0:
                    # Headers are already sent: the server can only drop the connection
                    raise CollaboratorFailure(error_message(stderr_lines), returncode)
            finally:
                await shutdown()

        return generate()

ytdlp_client = YtDlpClient()
