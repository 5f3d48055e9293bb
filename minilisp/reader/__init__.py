from minilisp.reader.parser import Reader, read, read_all
from minilisp.reader.scanner import ParenScanner
