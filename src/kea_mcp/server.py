"""FastMCP server for Kea DHCP inventory and HA health."""

from fastmcp import FastMCP
from kea_mcp.context import ServerContext, get_context, set_context
from kea_mcp.resources import DHCP_ADMIN_PERSONA
from kea_mcp.tools import cluster, dhcp, inventory, pool, static_ips
from kea_mcp.utils.logging import configure_logging
from loguru import logger


def create_server(context: ServerContext | None = None) -> FastMCP:
    """Create FastMCP server with the DHCP administrator persona.

    Args:
        context: Prebuilt context; read from the environment when omitted
    """
    if context is not None:
        set_context(context)
    context = get_context()

    configure_logging(log_level=context.settings.log_level)

    mcp = FastMCP(
        name='kea-dhcp-mcp-server',
        instructions=DHCP_ADMIN_PERSONA,
    )

    _register_tools(mcp)

    logger.info(
        'Kea DHCP MCP Server initialized',
        kea_url=context.settings.kea_url,
        subnet_id=context.settings.subnet_id,
    )
    return mcp


def _register_tools(mcp: FastMCP) -> None:
    """Register all tools with the MCP server."""
    tool_modules = [inventory, static_ips, pool, dhcp, cluster]

    for module in tool_modules:
        module_name = module.__name__.split('.')[-1]
        logger.info(f'Registering {module_name} tools: {module.__all__}')

        for tool_name in module.__all__:
            tool_func = getattr(module, tool_name)
            mcp.tool(tool_func)

    logger.info(f'Registered {sum(len(m.__all__) for m in tool_modules)} total tools')


def main() -> None:
    """Main entry point for the MCP server."""
    try:
        mcp = create_server()
        logger.info('Starting Kea DHCP MCP Server')
        mcp.run()
    except KeyboardInterrupt:
        logger.info('Server stopped by user')
    except Exception as e:
        logger.error('Server error', error=str(e))
        raise


if __name__ == '__main__':
    main()
