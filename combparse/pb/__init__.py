from combparse.pb.opb_parser import OpbParser
