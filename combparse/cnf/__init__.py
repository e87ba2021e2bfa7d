from combparse.cnf.cnf_parser import CnfParser
