"""ssh-agent session handling."""

import asyncio
import logging
import os
import re
from collections.abc import MutableMapping
from pathlib import Path

import asyncssh

logger = logging.getLogger(__name__)

AGENT_VAR_RE = re.compile(r"(SSH_AUTH_SOCK|SSH_AGENT_PID)=([^;\s]+);")


def parse_agent_output(output: str) -> dict[str, str]:
    """Extract agent variables from ``ssh-agent -s`` output.

    Args:
        output: Bourne shell commands printed by ssh-agent

    Returns:
        Dict with SSH_AUTH_SOCK and SSH_AGENT_PID when present
    """
    return dict(AGENT_VAR_RE.findall(output))


class AgentSession:
    """The ssh-agent keys are loaded into.

    The agent is started lazily when no socket is known and is left
    running afterwards; this class never stops it.
    """

    def __init__(
        self,
        socket_path: str | None = None,
        agent_command: str = "ssh-agent",
        environ: MutableMapping[str, str] | None = None,
    ):
        """Initialize agent session.

        Args:
            socket_path: Agent socket (SSH_AUTH_SOCK), None to start one
            agent_command: ssh-agent executable
            environ: Environment updated with the started agent's variables
        """
        self.socket_path = socket_path
        self.agent_command = agent_command
        self.environ = environ if environ is not None else os.environ
        self.agent_pid: str | None = None

    async def ensure_running(self) -> str | None:
        """Return the agent socket, starting ssh-agent if needed.

        Returns:
            Socket path, or None if no agent could be started
        """
        if self.socket_path:
            return self.socket_path

        logger.info("Starting %s", self.agent_command)
        try:
            proc = await asyncio.create_subprocess_exec(
                self.agent_command,
                "-s",
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            stdout, stderr = await proc.communicate()
        except OSError as e:
            logger.warning("Cannot start %s: %s", self.agent_command, e)
            return None

        if proc.returncode != 0:
            logger.warning(
                "%s exited with %d: %s",
                self.agent_command,
                proc.returncode,
                stderr.decode(errors="replace").strip(),
            )
            return None

        variables = parse_agent_output(stdout.decode(errors="replace"))
        if "SSH_AUTH_SOCK" not in variables:
            logger.warning("No SSH_AUTH_SOCK in %s output", self.agent_command)
            return None

        self.environ.update(variables)
        self.socket_path = variables["SSH_AUTH_SOCK"]
        self.agent_pid = variables.get("SSH_AGENT_PID")
        logger.info("ssh-agent running (pid=%s, socket=%s)", self.agent_pid, self.socket_path)
        return self.socket_path

    async def add_key(self, private_path: Path) -> bool:
        """Load a private key into the agent.

        Never raises: a missing agent or a rejected key is only a warning.

        Args:
            private_path: Private key file

        Returns:
            True if the agent accepted the key
        """
        socket_path = await self.ensure_running()
        if not socket_path:
            logger.warning("No ssh-agent available, %s not loaded", private_path)
            return False

        try:
            agent = await asyncssh.connect_agent(socket_path)
        except (OSError, asyncssh.Error) as e:
            logger.warning("Cannot reach ssh-agent at %s: %s", socket_path, e)
            return False

        if agent is None:
            logger.warning("Cannot reach ssh-agent at %s", socket_path)
            return False

        try:
            await agent.add_keys([str(private_path)])
        except (OSError, ValueError, asyncssh.Error, asyncssh.KeyImportError) as e:
            logger.warning("ssh-agent rejected %s: %s", private_path, e)
            return False
        finally:
            agent.close()
            await agent.wait_closed()

        logger.info("Loaded %s into ssh-agent", private_path)
        return True
