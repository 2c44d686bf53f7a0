import platform

from relay_agent.printers.base import PrinterProvider


def get_provider() -> PrinterProvider:
    os_name = platform.system()
    if os_name == "Windows":
        from relay_agent.printers.windows import WindowsPrinterProvider
        return WindowsPrinterProvider()
    if os_name in ("Linux", "Darwin"):
        from relay_agent.printers.linux import CupsPrinterProvider
        return CupsPrinterProvider()
    raise RuntimeError(f"Unsupported operating system: {os_name}")
