from relay_agent.errors import PrintError
from relay_agent.printers.base import PrinterProvider


class WindowsPrinterProvider(PrinterProvider):
    def list_printers(self):
        import win32print
        flags = win32print.PRINTER_ENUM_LOCAL | win32print.PRINTER_ENUM_CONNECTIONS
        printers = win32print.EnumPrinters(flags)
        return [p[2] for p in printers]

    def print_raw(self, printer, data: bytes, title: str = "Print Relay Job"):
        import pywintypes
        import win32print
        try:
            h = win32print.OpenPrinter(printer)
        except pywintypes.error as e:
            raise PrintError(f"Cannot open printer {printer}: {e}")
        try:
            win32print.StartDocPrinter(h, 1, (title, None, "RAW"))
            try:
                win32print.StartPagePrinter(h)
                win32print.WritePrinter(h, data)
                win32print.EndPagePrinter(h)
            finally:
                win32print.EndDocPrinter(h)
        except pywintypes.error as e:
            raise PrintError(f"Windows spooler error on {printer}: {e}")
        finally:
            win32print.ClosePrinter(h)
        return f"{len(data)} bytes sent"
